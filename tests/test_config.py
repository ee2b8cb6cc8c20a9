import pytest

from src.core.config import Config, ConfigError, load_config


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config == Config()
    assert config.gestures.hold_frames == 5
    assert config.gestures.proximity_far_area == 0.05
    assert config.gestures.proximity_near_area == 0.30
    assert config.gestures.burn_proximity == 0.15
    assert config.paper.shake_ms == 400
    assert config.paper.burn_ms == 2500
    assert config.paper.spark_count == 40


def test_partial_yaml_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "gestures:\n"
        "  hold_frames: 8\n"
        "  unknown_key: 1\n"
        "paper:\n"
        "  burn_ms: 1000\n"
    )
    config = load_config(path)
    assert config.gestures.hold_frames == 8
    assert config.gestures.burn_proximity == 0.15
    assert config.paper.burn_ms == 1000
    assert config.camera.device_id == 0


def test_empty_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


@pytest.mark.parametrize("yaml_text", [
    "gestures:\n  proximity_near_area: 0.01\n",
    "gestures:\n  hold_frames: -1\n",
    "gestures:\n  fist_min_curled: 5\n",
    "gestures:\n  burn_proximity: 1.5\n",
    "paper:\n  burn_ms: -10\n",
    "paper:\n  spark_count: -1\n",
])
def test_invalid_values_rejected(tmp_path, yaml_text):
    path = tmp_path / "config.yaml"
    path.write_text(yaml_text)
    with pytest.raises(ConfigError):
        load_config(path)
