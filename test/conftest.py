import pytest


@pytest.fixture(autouse=True)
def set_random_seed():
    import numpy as np

    np.random.seed(17)


@pytest.fixture(autouse=True)
def restore_runtime_settings():
    from windmix import runtime_settings as rs

    old_rs = rs.as_dict()

    yield

    for key, val in old_rs.items():
        setattr(rs, key, val)


@pytest.fixture
def diskless():
    from windmix import runtime_settings as rs

    rs.diskless_mode = True


@pytest.fixture
def dummy_engine():
    from dummy_engine import DummyEngine

    return DummyEngine()


@pytest.fixture
def small_state():
    from windmix.state import get_default_state
    from windmix.grid import calc_grid

    state = get_default_state()

    with state.settings.unlock():
        state.settings.update(
            identifier="small",
            nx=4,
            ny=3,
            nz=5,
            Lx=8.0,
            Ly=6.0,
            Lz=10.0,
            stop_time=60.0,
            seed=42,
        )

    state.initialize_variables()
    state.variables.dt = state.settings.dt
    calc_grid(state)
    return state
