import numpy as np


def noise_profile(z, Lz, rng):
    """Random noise that vanishes at the surface (z = 0) and the bottom (z = -Lz)."""
    z = np.asarray(z)
    return rng.standard_normal(z.shape) * z / Lz * (1 + z / Lz)


def initial_temperature(z, surface_temp, temp_gradient, Lz, temp_noise, noise):
    """Linear stratification plus a small perturbation."""
    return surface_temp + temp_gradient * z + temp_gradient * Lz * temp_noise * noise


def initial_velocity(noise, surface_momentum_flux, velocity_noise):
    """Velocity perturbation scaled by the friction velocity of the wind forcing."""
    return np.sqrt(abs(surface_momentum_flux)) * velocity_noise * noise


def set_initial_conditions(state, surface_momentum_flux):
    vs = state.variables
    settings = state.settings
    rng = np.random.default_rng(settings.seed)

    shape = (settings.nx, settings.ny, settings.nz)
    z = np.broadcast_to(vs.zt[np.newaxis, np.newaxis, :], shape)
    zw = np.broadcast_to(vs.zw[np.newaxis, np.newaxis, :], shape[:2] + (settings.nz + 1,))

    vs.temp = initial_temperature(
        z,
        settings.surface_temp,
        settings.temp_gradient,
        settings.Lz,
        settings.temp_noise,
        noise_profile(z, settings.Lz, rng),
    )
    vs.u = initial_velocity(noise_profile(z, settings.Lz, rng), surface_momentum_flux, settings.velocity_noise)
    vs.w = initial_velocity(noise_profile(zw, settings.Lz, rng), surface_momentum_flux, settings.velocity_noise)
    vs.v = np.zeros(shape)
    vs.salt = np.full(shape, settings.salinity)
