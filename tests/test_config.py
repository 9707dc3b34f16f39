import logging
from pathlib import Path

import pytest

from cairn.config import GameConfig, load_config
from cairn.errors import ConfigError

REPO_CONFIG = Path(__file__).parent.parent / "data" / "config.yaml"


def test_repo_config_matches_defaults():
    assert load_config(REPO_CONFIG) == GameConfig()


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="cairn.config"):
        config = load_config(tmp_path / "missing.yaml")
    assert config == GameConfig()
    assert "Config not found" in caplog.text


def test_load_custom_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "grid:\n"
        "  width: 7\n"
        "  height: 6\n"
        "obstacles:\n"
        "  density: 0.2\n"
        "  safe_cell: {col: 1, row: 1}\n"
        "  reroll_enclosed: false\n"
        "timing:\n"
        "  animation_hold_ms: 250\n"
        "  session_time_limit_s: null\n"
        "seed: 9\n"
    )
    config = load_config(path)
    assert (config.width, config.height) == (7, 6)
    assert config.obstacle_density == 0.2
    assert config.safe_cell == (1, 1)
    assert config.reroll_enclosed is False
    assert config.animation_hold == 0.25
    assert config.session_time_limit is None
    assert config.seed == 9


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == GameConfig()


@pytest.mark.parametrize("kwargs", [
    {"width": 2},
    {"height": 0},
    {"obstacle_density": 1.0},
    {"obstacle_density": -0.1},
    {"animation_hold": -1},
    {"max_rerolls": -1},
    {"session_time_limit": 0},
    {"safe_cell": (11, 0)},
])
def test_invalid_values_raise(kwargs):
    with pytest.raises(ConfigError):
        GameConfig(**kwargs)


@pytest.mark.parametrize("text", [
    "grid:\n  width: wide\n",
    "obstacles:\n  safe_cell: [1]\n",
    "- just\n- a list\n",
])
def test_malformed_yaml_values_raise(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(path)
