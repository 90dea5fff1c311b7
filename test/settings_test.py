import pytest

from windmix.settings import SETTINGS, check_setting_conflicts


def test_setting_metadata():
    for key, setting in SETTINGS.items():
        assert setting.description, key
        assert setting.type(setting.default) == setting.default or setting.default is None


@pytest.mark.parametrize(
    "override",
    [
        dict(nz=0),
        dict(nz=1),
        dict(Lx=-1.0),
        dict(stop_time=0.0),
        dict(dt=0.0),
        dict(cfl=0.0),
        dict(max_change=0.9),
        dict(min_change=1.5),
        dict(min_dt=10.0, max_dt=5.0),
    ],
)
def test_setting_conflicts(small_state, override):
    settings = small_state.settings
    check_setting_conflicts(settings)

    with settings.unlock():
        settings.update(override)

    with pytest.raises(RuntimeError):
        check_setting_conflicts(settings)


def test_optional_setting_accepts_none():
    seed_type = SETTINGS["seed"].type
    assert seed_type(None) is None
    assert seed_type("None") is None
    assert seed_type("42") == 42

    with pytest.raises(ValueError):
        seed_type("forty-two")
