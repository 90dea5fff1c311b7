import numpy as np
import pytest

from windmix import forcing
from windmix.settings import SETTINGS


def test_momentum_flux():
    flux = forcing.momentum_flux(u10=10.0, c_drag=2.5e-3, rho_air=1.225, rho_0=1026.0)
    assert flux == pytest.approx(-1.225 / 1026.0 * 2.5e-3 * 100)
    assert flux < 0


def test_momentum_flux_reverses_with_wind():
    assert forcing.momentum_flux(-10.0, 2.5e-3, 1.225, 1026.0) == pytest.approx(
        -forcing.momentum_flux(10.0, 2.5e-3, 1.225, 1026.0)
    )


def test_temperature_flux():
    flux = forcing.temperature_flux(heat_flux=200.0, rho_0=1026.0, cp=3991.0)
    assert flux == pytest.approx(200.0 / (1026.0 * 3991.0))
    assert flux > 0


def test_salinity_flux():
    salt = np.array([[35.0, 34.0]])
    flux = forcing.salinity_flux(0.0, 0.0, 0.0, salt, 1e-3 / 3600)
    np.testing.assert_allclose(flux, -1e-3 / 3600 * salt)


def test_boundary_conditions_from_settings(small_state):
    bcs = forcing.get_boundary_conditions(small_state.settings)

    assert set(bcs.keys()) == {"u", "temp", "salt"}
    assert isinstance(bcs["u"].top, forcing.FluxBoundaryCondition)
    assert bcs["u"].bottom is None
    assert isinstance(bcs["temp"].bottom, forcing.GradientBoundaryCondition)
    assert bcs["temp"].bottom.value == SETTINGS["temp_gradient"].default
    assert callable(bcs["salt"].top.value)
    assert bcs["salt"].top.parameters == small_state.settings.evaporation_rate


def test_evaluate_constant_condition(small_state):
    bc = forcing.FluxBoundaryCondition(2.0)
    res = forcing.evaluate_boundary_condition(bc, small_state)
    assert res.shape == (4, 3)
    np.testing.assert_array_equal(res, 2.0)


def test_evaluate_callable_condition(small_state):
    vs = small_state.variables
    vs.salt = np.random.rand(4, 3, 5)

    def flux(x, y, t, salt, scale):
        return scale * (x + y + salt)

    bc = forcing.FluxBoundaryCondition(flux, parameters=2.0)
    res = forcing.evaluate_boundary_condition(bc, small_state, vs.salt)

    expected = 2.0 * (vs.xt[:, np.newaxis] + vs.yt[np.newaxis, :] + vs.salt[:, :, -1])
    np.testing.assert_allclose(res, expected)


def test_set_surface_forcing(small_state):
    vs = small_state.variables
    settings = small_state.settings
    vs.salt = np.full((4, 3, 5), 35.0)

    bcs = forcing.get_boundary_conditions(settings)
    forcing.set_surface_forcing(small_state, bcs)

    np.testing.assert_allclose(
        vs.surface_taux, forcing.momentum_flux(settings.u10, settings.c_drag, settings.rho_air, settings.rho_0)
    )
    np.testing.assert_array_equal(vs.surface_tauy, 0.0)
    np.testing.assert_allclose(vs.forc_temp_surface, settings.heat_flux / (settings.rho_0 * settings.cp))
    np.testing.assert_allclose(vs.forc_salt_surface, -settings.evaporation_rate * 35.0)
    np.testing.assert_allclose(vs.temp_grad_bottom, settings.temp_gradient)


def test_set_surface_forcing_no_flux(small_state):
    vs = small_state.variables
    forcing.set_surface_forcing(small_state, {})

    for var, _ in forcing.FORCING_VARIABLES:
        np.testing.assert_array_equal(getattr(vs, var), 0.0)

    np.testing.assert_array_equal(vs.temp_grad_bottom, 0.0)
