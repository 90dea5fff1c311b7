import numpy as np
import pytest

from windmix import initial_conditions
from windmix.forcing import momentum_flux


def test_noise_vanishes_at_boundaries():
    rng = np.random.default_rng(0)
    z = np.array([-10.0, -5.0, 0.0])
    noise = initial_conditions.noise_profile(z, 10.0, rng)

    assert noise[0] == 0.0
    assert noise[-1] == 0.0


def test_noise_is_reproducible():
    z = np.linspace(-10, 0, 11)
    first = initial_conditions.noise_profile(z, 10.0, np.random.default_rng(3))
    second = initial_conditions.noise_profile(z, 10.0, np.random.default_rng(3))
    np.testing.assert_array_equal(first, second)


def test_initial_temperature_without_noise():
    z = np.array([-32.0, -16.0, 0.0])
    temp = initial_conditions.initial_temperature(z, 20.0, 0.01, 32.0, 1e-6, np.zeros(3))
    np.testing.assert_allclose(temp, [19.68, 19.84, 20.0])


def test_initial_velocity_scale():
    noise = np.ones(4)
    flux = momentum_flux(10.0, 2.5e-3, 1.225, 1026.0)
    u = initial_conditions.initial_velocity(noise, flux, 1e-3)
    np.testing.assert_allclose(u, np.sqrt(abs(flux)) * 1e-3)


def test_set_initial_conditions(small_state):
    vs = small_state.variables
    settings = small_state.settings
    flux = momentum_flux(settings.u10, settings.c_drag, settings.rho_air, settings.rho_0)

    initial_conditions.set_initial_conditions(small_state, flux)

    assert vs.temp.shape == (4, 3, 5)
    assert vs.w.shape == (4, 3, 6)

    expected_temp = settings.surface_temp + settings.temp_gradient * vs.zt
    deviation = vs.temp - expected_temp[np.newaxis, np.newaxis, :]
    assert np.max(np.abs(deviation)) < settings.temp_gradient * settings.Lz * settings.temp_noise * 10

    # vertical velocity vanishes on the top and bottom faces
    np.testing.assert_array_equal(vs.w[:, :, 0], 0.0)
    np.testing.assert_array_equal(vs.w[:, :, -1], 0.0)

    np.testing.assert_array_equal(vs.v, 0.0)
    np.testing.assert_array_equal(vs.salt, settings.salinity)
    assert np.max(np.abs(vs.u)) < np.sqrt(abs(flux)) * settings.velocity_noise * 10
    assert np.any(vs.u != 0)


def test_set_initial_conditions_seeded(small_state):
    from windmix.state import get_default_state
    from windmix.grid import calc_grid

    other_state = get_default_state()
    with other_state.settings.unlock():
        other_state.settings.update(dict(small_state.settings.items()))
    other_state.initialize_variables()
    calc_grid(other_state)

    for state in (small_state, other_state):
        initial_conditions.set_initial_conditions(state, -1e-4)

    np.testing.assert_array_equal(small_state.variables.temp, other_state.variables.temp)
    np.testing.assert_array_equal(small_state.variables.u, other_state.variables.u)


@pytest.mark.parametrize("seed", [None, 1])
def test_initial_temperature_is_finite(small_state, seed):
    with small_state.settings.unlock():
        small_state.settings.seed = seed

    initial_conditions.set_initial_conditions(small_state, -1e-4)
    assert np.all(np.isfinite(small_state.variables.temp))
