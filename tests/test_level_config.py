import pytest

from levelgen.layout import ConfigurationError, LevelConfig


def test_defaults_validate():
    cfg = LevelConfig().validate()
    assert cfg.room_count == 10
    assert cfg.room_type_count == 2
    assert cfg.seed is None
    assert cfg.verify_connectivity and cfg.enable_metrics


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"room_count": -3}, "room_count"),
        ({"room_count": 2.5}, "room_count"),
        ({"room_type_count": 0}, "room_type_count"),
        ({"room_type_count": False}, "room_type_count"),
        ({"seed": 1.5}, "seed"),
        ({"room_width": 0}, "room_width"),
        ({"room_length": -2.0}, "room_length"),
        ({"max_walk_steps": 0}, "max_walk_steps"),
    ],
)
def test_invalid_fields(kwargs, field):
    with pytest.raises(ConfigurationError) as exc:
        LevelConfig(**kwargs).validate()
    assert exc.value.field == field
    assert exc.value.to_dict()["field"] == field
    assert isinstance(exc.value, ValueError)


def test_negative_seed_is_allowed():
    assert LevelConfig(seed=-5).validate().seed == -5


def test_merged_skips_none_and_keeps_original():
    base = LevelConfig(room_count=3, seed=9)
    cfg = base.merged(room_count=None, room_type_count=4)
    assert cfg.room_count == 3 and cfg.room_type_count == 4 and cfg.seed == 9
    assert base.room_type_count == 2


def test_merged_rejects_unknown_option():
    with pytest.raises(ConfigurationError):
        LevelConfig().merged(rooms=5)


def test_from_env():
    env = {
        "LEVELGEN_ROOM_COUNT": "25",
        "LEVELGEN_ROOM_TYPE_COUNT": "6",
        "LEVELGEN_SEED": "77",
        "LEVELGEN_ROOM_WIDTH": "7.5",
        "LEVELGEN_VERIFY_CONNECTIVITY": "no",
        "LEVELGEN_ENABLE_METRICS": "1",
        "LEVELGEN_MAX_WALK_STEPS": "",
    }
    cfg = LevelConfig.from_env(env)
    assert cfg.room_count == 25
    assert cfg.room_type_count == 6
    assert cfg.seed == 77
    assert cfg.room_width == 7.5
    assert cfg.verify_connectivity is False
    assert cfg.enable_metrics is True
    assert cfg.max_walk_steps is None


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LEVELGEN_ROOM_COUNT", "4")
    assert LevelConfig.from_env().room_count == 4


def test_from_env_bad_value():
    with pytest.raises(ConfigurationError) as exc:
        LevelConfig.from_env({"LEVELGEN_ROOM_COUNT": "many"})
    assert exc.value.field == "room_count"


def test_to_dict_round_trip():
    cfg = LevelConfig(room_count=2, seed=1)
    assert LevelConfig(**cfg.to_dict()) == cfg


@pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("yes", True), ("0", False), ("off", False)])
def test_metrics_flag_parsed_alike_for_app_and_config(raw, expected):
    from levelgen import _app_settings

    env = {"LEVELGEN_ENABLE_METRICS": raw}
    assert _app_settings(env)["LEVELGEN_ENABLE_METRICS"] is expected
    assert LevelConfig.from_env(env).enable_metrics is expected


def test_app_settings_defaults():
    from levelgen import _app_settings

    settings = _app_settings({})
    assert settings["LEVELGEN_ENABLE_METRICS"] is True
    assert settings["LEVELGEN_MAX_ROOMS"] == 500
    assert settings["LEVELGEN_CACHE_SIZE"] == 8
