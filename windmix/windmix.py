import abc

import numpy as np

from windmix import settings, time, signals, progress, logger
from windmix.state import get_default_state
from windmix.timer import timer_context
from windmix.timestepping import TIME_EPS

#: (timer name, label) pairs reported after a run
TIMING_SUMMARY = (
    ("setup", "setup time"),
    ("main", "main loop time"),
    ("forcing", "  forcing"),
    ("engine", "  engine"),
    ("diagnostics", "diagnostics and I/O"),
)


class LESSetup(metaclass=abc.ABCMeta):
    """Base class of all model setups.

    A setup defines the scenario by implementing the ``set_*`` hooks and
    :meth:`after_timestep`; time integration is left to an
    :class:`~windmix.engine.LESEngine`, passed as instance or name (see
    :func:`~windmix.engine.load_engine`).

    Example:
        >>> simulation = MyScenario(engine="my_les_package:Engine")
        >>> simulation.setup()
        >>> simulation.run()
        >>> simulation.state.variables.temp.mean()
    """

    def __init__(self, engine, override=None):
        from windmix.engine import load_engine

        self.override_settings = dict(override or {})
        self.engine = load_engine(engine)
        self.boundary_conditions = {}
        self.wizard = None
        self.state = get_default_state()
        self._setup_done = False

    @abc.abstractmethod
    def set_parameter(self, state):
        """Modify ``state.settings`` here (grid, domain, time stepping, physics).

        Settings are unlocked while this runs; overrides given on construction are
        applied afterwards.
        """
        pass

    @abc.abstractmethod
    def set_initial_conditions(self, state):
        """Fill ``u``, ``v``, ``w``, ``temp`` and ``salt``. The grid already exists."""
        pass

    @abc.abstractmethod
    def set_boundary_conditions(self, state):
        """Return a dict of :class:`~windmix.forcing.FieldBoundaryConditions` per field name.

        Fields without an entry have no-flux boundaries.
        """
        pass

    @abc.abstractmethod
    def set_forcing(self, state):
        """Update the surface forcing variables. Called before every time step."""
        pass

    @abc.abstractmethod
    def set_diagnostics(self, state):
        """Adjust diagnostics, e.g. ``state.diagnostics["snapshot"].output_frequency = 60.``"""
        pass

    @abc.abstractmethod
    def after_timestep(self, state):
        pass

    def _ensure_setup_done(self):
        if not self._setup_done:
            raise RuntimeError("setup() method has to be called before running the model")

    def _apply_settings(self, state):
        with state.settings.unlock():
            self.set_parameter(state)
            state.settings.update(self.override_settings)

        settings.check_setting_conflicts(state.settings)

    def setup(self):
        from windmix import diagnostics, grid
        from windmix.timestepping import TimeStepWizard

        logger.info("Running model setup")
        state = self.state

        with state.timers["setup"]:
            self._apply_settings(state)

            state.initialize_variables()
            state.variables.dt = state.settings.dt
            grid.calc_grid(state)
            state.diagnostics.update(diagnostics.create_default_diagnostics(state))

            self.set_initial_conditions(state)
            self.boundary_conditions = self.set_boundary_conditions(state) or {}
            self.wizard = TimeStepWizard.from_settings(state.settings)

            self.set_forcing(state)
            self.engine.initialize(state, self.boundary_conditions)

            self.set_diagnostics(state)
            diagnostics.initialize(state)

        self._setup_done = True

    def _wizard_due(self, itt):
        interval = self.state.settings.wizard_interval
        return bool(interval) and itt > 0 and itt % interval == 0

    def step(self, state):
        """Advances the model by one (possibly shortened) time step and returns its length."""
        from windmix import diagnostics
        from windmix.timestepping import aligned_time_step

        self._ensure_setup_done()
        vs = state.variables

        with state.timers["main"]:
            with state.timers["forcing"]:
                self.set_forcing(state)

            if self._wizard_due(int(vs.itt)):
                vs.dt = self.wizard.new_dt(state)

            targets = [state.settings.stop_time, *diagnostics.next_event_times(state)]
            dt = aligned_time_step(float(vs.dt), float(vs.time), targets)

            with state.timers["engine"]:
                self.engine.time_step(state, dt)

        vs.itt = vs.itt + 1
        vs.time = vs.time + dt

        self.after_timestep(state)

        with state.timers["diagnostics"]:
            if not sanity_check(state):
                raise RuntimeError(f"solution diverged at iteration {int(vs.itt)}")

            diagnostics.diagnose(state)
            diagnostics.output(state)

        logger.trace(" Time step took {:.2f}s", state.timers["main"].last_time)
        return dt

    def run(self):
        """Integrates from the current time to ``stop_time``.

        Writes initial output first. Interrupt signals end the run with
        ``SystemExit`` after the timing summary is logged.
        """
        from windmix import diagnostics

        self._ensure_setup_done()
        state = self.state
        vs = state.variables

        remaining = time.format_time(state.settings.stop_time - float(vs.time))
        logger.info("\nStarting integration for {:.1f} {}", *remaining)

        diagnostics.diagnose(state)
        diagnostics.output(state)

        # the first iteration includes one-off costs, keep it out of the timers
        timer_context.active = False

        try:
            with signals.signals_to_exception(), progress.get_progress_bar(state) as pbar:
                while float(vs.time) < state.settings.stop_time - TIME_EPS:
                    dt = self.step(state)
                    timer_context.active = True
                    pbar.advance_time(dt)

        except BaseException:
            logger.critical("Stopping integration at iteration {}", int(vs.itt))
            raise

        else:
            logger.success("Integration done\n")

        finally:
            timer_context.active = True
            self._timing_summary()

    def _timing_summary(self):
        timers = self.state.timers
        lines = ["", "Timing summary:", "(excluding first iteration)", "---"]
        lines.extend(f" {label:<24} = {timers[name].total_time:.2f}s" for name, label in TIMING_SUMMARY)
        logger.debug("\n".join(lines))


def sanity_check(state):
    """False if any velocity component contains NaN or infinity."""
    vs = state.variables
    return all(np.all(np.isfinite(component)) for component in (vs.u, vs.v, vs.w))
