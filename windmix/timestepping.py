import numpy as np

from windmix import logger

#: Tolerance in seconds when comparing model times
TIME_EPS = 1e-8


def cfl_number(state, dt):
    """Maximal advective CFL number of the current velocity field."""
    vs = state.variables

    hor_cfl = max(
        np.max(np.abs(vs.u) / vs.dxt[:, np.newaxis, np.newaxis]),
        np.max(np.abs(vs.v) / vs.dyt[np.newaxis, :, np.newaxis]),
    )

    # w vanishes on the boundary faces, interior faces are spaced between T points
    if vs.dzt.size > 1:
        dzw = 0.5 * (vs.dzt[1:] + vs.dzt[:-1])
        ver_cfl = np.max(np.abs(vs.w[:, :, 1:-1]) / dzw[np.newaxis, np.newaxis, :])
    else:
        ver_cfl = 0.0

    return dt * max(hor_cfl, ver_cfl)


class TimeStepWizard:
    """Adapts the time step to keep the advective CFL number close to a target.

    The time step changes by at most a factor of ``max_change`` (and at least
    ``min_change``) per update and always stays within ``[min_dt, max_dt]``.
    """

    def __init__(self, cfl=1.0, max_change=1.1, min_change=0.5, max_dt=np.inf, min_dt=0.0):
        self.cfl = cfl
        self.max_change = max_change
        self.min_change = min_change
        self.max_dt = max_dt
        self.min_dt = min_dt

    @classmethod
    def from_settings(cls, settings):
        return cls(
            cfl=settings.cfl,
            max_change=settings.max_change,
            min_change=settings.min_change,
            max_dt=settings.max_dt,
            min_dt=settings.min_dt,
        )

    def new_dt(self, state):
        dt = float(state.variables.dt)
        current_cfl = cfl_number(state, dt)

        if np.isnan(current_cfl):
            raise RuntimeError(f"CFL number is NaN at iteration {int(state.variables.itt)}")

        if current_cfl > 0:
            new_dt = dt * self.cfl / current_cfl
        else:
            new_dt = np.inf

        new_dt = min(max(new_dt, self.min_change * dt), self.max_change * dt)
        new_dt = min(max(new_dt, self.min_dt), self.max_dt)

        logger.trace(f" Time step wizard: CFL = {current_cfl:.3f}, dt = {dt:.3f}s -> {new_dt:.3f}s")
        return new_dt


def aligned_time_step(dt, time, targets):
    """Shortens ``dt`` so that no time in ``targets`` lying ahead is overshot."""
    for target in targets:
        if target is None:
            continue

        remaining = target - time
        if TIME_EPS < remaining < dt:
            dt = remaining

    return dt
