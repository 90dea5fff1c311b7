import contextlib
from collections import defaultdict

from windmix import (
    timer,
    settings as settings_mod,
    variables as var_mod,
    runtime_settings as rs,
)


def _describe(value):
    # arrays are summarized, everything else is shown in full
    if hasattr(value, "shape") and hasattr(value, "dtype"):
        return f"{type(value)} with shape {value.shape}, dtype {value.dtype}"
    return repr(value)


class StrictContainer:
    """Attribute container that only accepts a fixed set of public names.

    Names starting with an underscore are reserved for internal bookkeeping.
    """

    _names = ()

    def __init__(self, names, default=None):
        names = tuple(names)
        bad = [name for name in names if name.startswith("_")]
        if bad:
            raise ValueError(f"Container fields cannot start with an underscore (got: {bad})")

        self._names = names
        for name in names:
            object.__setattr__(self, name, default)

    def _store(self, name, value):
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        if name.startswith("_"):
            return object.__setattr__(self, name, value)

        if name not in self._names:
            raise AttributeError(f"{type(self).__qualname__} has no field {name!r}")

        self._store(name, value)

    def items(self):
        return [(name, getattr(self, name)) for name in self._names]

    def get(self, name, default=None):
        return getattr(self, name, default)

    def update(self, other=(), **fields):
        fields = dict(other, **fields)

        unknown = [name for name in fields if name not in self._names]
        if unknown:
            raise AttributeError(f"{type(self).__qualname__} has no fields {unknown}")

        for name, value in fields.items():
            setattr(self, name, value)

        return self

    def __repr__(self):
        body = ",\n".join(f"    {name} = {_describe(value)}" for name, value in self.items())
        return f"{type(self).__qualname__}(\n{body}\n)"


class LESSettings(StrictContainer):
    """Model settings, coerced to their declared types and locked after setup."""

    def __init__(self, settings_meta):
        self._meta = settings_meta
        self._locked = False
        super().__init__(settings_meta.keys())

        for name, meta in settings_meta.items():
            setattr(self, name, meta.default)

        self._locked = True

    @contextlib.contextmanager
    def unlock(self):
        was_locked = self._locked
        self._locked = False
        try:
            yield self
        finally:
            self._locked = was_locked

    def _store(self, name, value):
        if self._locked:
            raise RuntimeError(
                f"Settings are locked. Use `with settings.unlock():` to modify {name!r} "
                "(only safe before the model is set up)."
            )

        if name in self._meta:
            value = self._meta[name].type(value)

        super()._store(name, value)


class LESVariables(StrictContainer):
    """Model arrays with fixed shapes (from dimension names) and dtypes."""

    def __init__(self, var_meta, dimensions):
        self._meta = var_meta
        self._dimensions = dimensions
        self._ready = False
        super().__init__(var_meta.keys())

        for name, var in var_meta.items():
            fill = 0 if var.initial is None else var.initial
            self._store(name, var_mod.allocate(dimensions, var.dims, dtype=var.dtype, fill=fill))

        self._ready = True

    def _store(self, name, value):
        import numpy as np

        if not self._ready:
            return super()._store(name, value)

        var = self._meta[name]
        value = np.asarray(value, dtype=var.dtype or rs.float_type)

        expected_shape = var_mod.get_shape(self._dimensions, var.dims)
        if value.shape != expected_shape:
            raise ValueError(f"Variable {name} must have shape {expected_shape} (got: {value.shape})")

        super()._store(name, value)


class LESState:
    """Settings, variables and diagnostics of one model run.

    Variables are only allocated by :meth:`initialize_variables`, once the
    settings that determine their shapes are final.
    """

    def __init__(self, var_meta, setting_meta, dimensions, diagnostics=None):
        self.var_meta = var_meta
        self.settings = LESSettings(setting_meta)
        self.diagnostics = {} if diagnostics is None else diagnostics
        self.timers = defaultdict(timer.Timer)

        self._dimension_sources = dimensions
        self._variables = None

    def initialize_variables(self):
        if self._variables is not None:
            raise RuntimeError("Variables are already initialized.")

        self._variables = LESVariables(self.var_meta, self.dimensions)

    @property
    def variables(self):
        if self._variables is None:
            raise RuntimeError("Variables have not been initialized yet.")

        return self._variables

    @property
    def dimensions(self):
        """Current size of every dimension, looked up from the settings where needed."""
        sizes = {}
        for name, source in self._dimension_sources.items():
            if isinstance(source, str):
                source = getattr(self.settings, source)
            elif callable(source):
                source = source(self.settings)
            sizes[name] = int(source)
        return sizes

    def to_xarray(self):
        import xarray as xr

        coords, data_vars = {}, {}

        for name, meta in self.var_meta.items():
            dims = meta.dims or ()
            attrs = dict(long_name=meta.name, units=meta.units, **meta.extra_attributes)
            array = xr.DataArray(self.variables.get(name), dims=dims, name=name, attrs=attrs)

            if dims == (name,):
                coords[name] = array
            else:
                data_vars[name] = array

        return xr.Dataset(data_vars, coords=coords, attrs=dict(self.settings.items()))


def get_default_state():
    from copy import deepcopy

    return LESState(deepcopy(var_mod.VARIABLES), settings_mod.SETTINGS, var_mod.DIM_TO_SHAPE_VAR)
