import abc
import importlib

from windmix import logger

ENGINE_ENTRY_POINT_GROUP = "windmix.engines"


class LESEngine(metaclass=abc.ABCMeta):
    """Adapter to the external LES solver that advances the model state.

    The solver owns discretization, turbulence closure, and time integration.
    windmix hands it the boundary conditions once, and the current time step
    plus surface forcing on every step. After :meth:`time_step` returns, the
    engine must have written ``u``, ``v``, ``w``, ``temp``, and ``salt`` (and
    optionally the eddy viscosity ``nu_e``) back to ``state.variables``.
    """

    name = None  #: Name used in log messages

    @abc.abstractmethod
    def initialize(self, state, boundary_conditions):
        """Called once at the end of setup, after initial conditions are set."""
        pass

    @abc.abstractmethod
    def time_step(self, state, dt):
        """Advance all prognostic fields by ``dt`` seconds."""
        pass


def _import_object(path):
    module_name, _, attr = path.partition(":")
    module = importlib.import_module(module_name)

    try:
        return getattr(module, attr)
    except AttributeError:
        raise RuntimeError(f"module {module_name} has no attribute {attr}") from None


def _load_entry_point(name):
    import entrypoints

    try:
        entry_point = entrypoints.get_single(ENGINE_ENTRY_POINT_GROUP, name)
    except entrypoints.NoSuchEntryPoint:
        raise RuntimeError(
            f'no LES engine named "{name}" is installed (entry point group {ENGINE_ENTRY_POINT_GROUP})'
        ) from None

    return entry_point.load()


def load_engine(name, **kwargs):
    """Instantiates an engine given as ``"module:Class"`` or by entry point name."""
    if isinstance(name, LESEngine):
        return name

    if ":" in name:
        engine_cls = _import_object(name)
    else:
        engine_cls = _load_entry_point(name)

    if not isinstance(engine_cls, type) or not issubclass(engine_cls, LESEngine):
        raise RuntimeError(f"{name} is not a valid LES engine (must be a subclass of LESEngine)")

    engine = engine_cls(**kwargs)
    logger.debug(f"Using LES engine {engine.name or engine_cls.__name__}")
    return engine
