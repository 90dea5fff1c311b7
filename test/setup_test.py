import os

import numpy as np
import pytest

SMALL_GRID = dict(nx=8, ny=8, nz=6, stop_time=120.0, seed=1)


@pytest.mark.parametrize("float_type", ("float32", "float64"))
def test_setup_wind_mixing(float_type, diskless, dummy_engine):
    from windmix import runtime_settings

    runtime_settings.float_type = float_type

    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(dummy_engine, override=SMALL_GRID)
    sim.setup()

    vs = sim.state.variables
    assert vs.temp.dtype == np.dtype(float_type)
    assert vs.temp.shape == (8, 8, 6)

    sim.run()

    assert float(vs.time) == pytest.approx(120.0)
    assert int(vs.itt) == dummy_engine.num_steps

    # surface cooling and evaporation
    assert np.all(vs.temp[:, :, -1] < sim.state.settings.surface_temp)
    assert np.all(vs.salt[:, :, -1] > sim.state.settings.salinity)
    np.testing.assert_array_equal(vs.salt[:, :, 0], sim.state.settings.salinity)


def test_setup_defaults(diskless, dummy_engine):
    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(dummy_engine)
    sim.setup()

    settings = sim.state.settings
    assert (settings.nx, settings.ny, settings.nz) == (32, 32, 24)
    assert (settings.Lx, settings.Ly, settings.Lz) == (64.0, 64.0, 32.0)
    assert settings.stop_time == 2400.0
    assert sim.state.diagnostics["snapshot"].output_frequency == 60.0
    assert set(sim.engine.boundary_conditions.keys()) == {"u", "temp", "salt"}


def test_time_step_alignment(diskless, dummy_engine):
    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(dummy_engine, override=dict(SMALL_GRID, dt=25.0))
    sim.setup()
    sim.run()

    # steps are shortened to hit every output time (60 s) exactly
    times = np.cumsum(dummy_engine.time_steps)
    for output_time in (60.0, 120.0):
        assert np.any(np.isclose(times, output_time))

    assert times[-1] == pytest.approx(120.0)


def test_time_step_adapts(diskless, dummy_engine):
    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(dummy_engine, override=dict(SMALL_GRID, stop_time=600.0))
    sim.setup()
    sim.run()

    # velocities stay small, so the time step grows towards max_dt
    assert float(sim.state.variables.dt) > 10.0
    assert max(dummy_engine.time_steps) <= sim.state.settings.max_dt


def test_setting_conflict(dummy_engine):
    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(dummy_engine, override=dict(nx=0))

    with pytest.raises(RuntimeError):
        sim.setup()


def test_run_before_setup(dummy_engine):
    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(dummy_engine)

    with pytest.raises(RuntimeError):
        sim.run()


def test_diverging_solution(diskless):
    from dummy_engine import DivergingEngine
    from windmix.setups.wind_mixing import WindMixingSetup

    sim = WindMixingSetup(DivergingEngine(), override=SMALL_GRID)
    sim.setup()

    with pytest.raises(RuntimeError) as exc:
        sim.run()

    assert "diverged" in str(exc.value)


def test_output_files(tmpdir, monkeypatch, dummy_engine):
    from windmix.analysis import load_snapshot
    from windmix.io_tools import netcdf as nctools
    from windmix.setups.wind_mixing import WindMixingSetup

    monkeypatch.chdir(tmpdir)

    sim = WindMixingSetup(dummy_engine, override=SMALL_GRID)
    sim.setup()
    sim.run()

    assert os.path.isfile("wind_mixing.snapshot.nc")
    assert os.path.isfile("wind_mixing.profiles.nc")

    with nctools.open_file("wind_mixing.snapshot.nc", "r") as ncfile:
        np.testing.assert_allclose(ncfile.variables["Time"][:], [0.0, 60.0, 120.0])
        assert ncfile.variables["temp"].dimensions == ("Time", "zt", "yt", "xt")
        assert ncfile.setup_identifier == "wind_mixing"

    with nctools.open_file("wind_mixing.profiles.nc", "r") as ncfile:
        assert len(ncfile.dimensions["zi"]) == 5
        np.testing.assert_allclose(nctools.read_variable(ncfile, "zi"), sim.state.variables.zw[1:-1])
        temp_mean = nctools.read_variable(ncfile, "temp_mean", time_step=-1)
        np.testing.assert_allclose(temp_mean, sim.state.variables.temp.mean(axis=(0, 1)))

    snapshot = load_snapshot("wind_mixing.snapshot.nc")
    assert snapshot["time"] == pytest.approx(120.0)
    np.testing.assert_allclose(snapshot["temp"], sim.state.variables.temp)
    np.testing.assert_allclose(snapshot["w"], sim.state.variables.w)


def test_refuse_overwrite(tmpdir, monkeypatch, dummy_engine):
    from windmix.setups.wind_mixing import WindMixingSetup

    monkeypatch.chdir(tmpdir)

    with open("wind_mixing.snapshot.nc", "w"):
        pass

    sim = WindMixingSetup(dummy_engine, override=SMALL_GRID)

    with pytest.raises(IOError):
        sim.setup()
