import numpy as np
import pytest

from windmix.timestepping import TimeStepWizard, aligned_time_step, cfl_number


def test_cfl_number_horizontal(small_state):
    vs = small_state.variables
    vs.u = np.full((4, 3, 5), 0.5)

    # dx = 2 m
    assert cfl_number(small_state, 4.0) == pytest.approx(1.0)


def test_cfl_number_vertical(small_state):
    vs = small_state.variables
    w = np.zeros((4, 3, 6))
    w[1, 1, 3] = -0.2
    vs.w = w

    # dz = 2 m
    assert cfl_number(small_state, 10.0) == pytest.approx(1.0)


def test_cfl_number_ignores_boundary_faces(small_state):
    vs = small_state.variables
    w = np.zeros((4, 3, 6))
    w[:, :, -1] = 1.0
    vs.w = w

    assert cfl_number(small_state, 10.0) == 0.0


def test_wizard_limits_growth(small_state):
    vs = small_state.variables
    vs.dt = 10.0
    vs.u = np.full((4, 3, 5), 1e-3)

    wizard = TimeStepWizard(cfl=1.0, max_change=1.1, max_dt=60.0)
    assert wizard.new_dt(small_state) == pytest.approx(11.0)


def test_wizard_max_dt(small_state):
    vs = small_state.variables
    vs.dt = 58.0

    wizard = TimeStepWizard(cfl=1.0, max_change=1.1, max_dt=60.0)
    assert wizard.new_dt(small_state) == pytest.approx(60.0)


def test_wizard_targets_cfl(small_state):
    vs = small_state.variables
    vs.dt = 10.0
    vs.u = np.full((4, 3, 5), 0.21)

    wizard = TimeStepWizard(cfl=1.0, max_change=1.1, min_change=0.5)
    new_dt = wizard.new_dt(small_state)
    assert new_dt == pytest.approx(2.0 / 0.21)
    assert cfl_number(small_state, new_dt) == pytest.approx(1.0)


def test_wizard_limits_shrinking(small_state):
    vs = small_state.variables
    vs.dt = 10.0
    vs.u = np.full((4, 3, 5), 100.0)

    wizard = TimeStepWizard(cfl=1.0, min_change=0.5, min_dt=1.0)
    assert wizard.new_dt(small_state) == pytest.approx(5.0)


def test_wizard_nan(small_state):
    vs = small_state.variables
    u = np.zeros((4, 3, 5))
    u[0, 0, 0] = np.nan
    vs.u = u

    with pytest.raises(RuntimeError):
        TimeStepWizard().new_dt(small_state)


def test_wizard_from_settings(small_state):
    wizard = TimeStepWizard.from_settings(small_state.settings)
    assert wizard.cfl == small_state.settings.cfl
    assert wizard.max_dt == small_state.settings.max_dt


def test_aligned_time_step():
    assert aligned_time_step(10.0, 55.0, [60.0]) == pytest.approx(5.0)
    assert aligned_time_step(10.0, 50.0, [60.0]) == 10.0
    assert aligned_time_step(10.0, 60.0, [60.0, 120.0]) == 10.0
    assert aligned_time_step(10.0, 55.0, [None, 58.0, 60.0]) == pytest.approx(3.0)
    assert aligned_time_step(10.0, 55.0, []) == 10.0
