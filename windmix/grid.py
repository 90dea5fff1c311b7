import numpy as np


def calc_grid(state):
    """Set up a regular rectilinear grid with the surface at z = 0."""
    vs = state.variables
    settings = state.settings

    dx = settings.Lx / settings.nx
    dy = settings.Ly / settings.ny
    dz = settings.Lz / settings.nz

    vs.dxt = np.full(settings.nx, dx)
    vs.dyt = np.full(settings.ny, dy)
    vs.dzt = np.full(settings.nz, dz)

    vs.xt = (np.arange(settings.nx) + 0.5) * dx
    vs.yt = (np.arange(settings.ny) + 0.5) * dy
    vs.zw = np.linspace(-settings.Lz, 0.0, settings.nz + 1)
    vs.zt = 0.5 * (vs.zw[1:] + vs.zw[:-1])
