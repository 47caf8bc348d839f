"""Tests for YAML configuration loading."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from postmap.config import DEFAULT_CONFIG, load_config, map_settings
from postmap.errors import InvalidInputError


def test_missing_file_gives_defaults(temp_dir):
    config = load_config(str(temp_dir / "missing.yaml"))
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_file_values_override_defaults(mock_config_file):
    settings = map_settings(load_config(mock_config_file))

    assert settings["width"] == 40
    assert settings["height"] == 20
    assert settings["density_radius"] == 2
    # untouched keys keep their defaults
    assert settings["padding_fraction"] == 0.01
    assert settings["uk_padding_fraction"] == 0.05
    assert settings["min_width"] == 10
    assert settings["min_height"] == 5


def test_unknown_keys_are_ignored(temp_dir):
    path = temp_dir / "postmap.yaml"
    path.write_text("map_defaults:\n  width: 50\n  colour: true\n")

    settings = map_settings(load_config(str(path)))
    assert settings["width"] == 50
    assert "colour" not in settings


def test_empty_file_gives_defaults(temp_dir):
    path = temp_dir / "postmap.yaml"
    path.write_text("")
    assert load_config(str(path)) == DEFAULT_CONFIG


@pytest.mark.parametrize("content", [
    "- a\n- b\n",
    "map_defaults: [1, 2]\n",
    "map_defaults: {width: [\n",
    "map_defaults: {density_radius: 1.5}\n",
    "map_defaults: {width: wide}\n",
    "map_defaults: {height: true}\n",
    "map_defaults: {padding_fraction: small}\n",
    "map_defaults: {color: 'yes please'}\n",
    "map_defaults: {batch_size: 10.0}\n",
])
def test_malformed_config_is_invalid_input(temp_dir, content):
    path = temp_dir / "postmap.yaml"
    path.write_text(content)
    with pytest.raises(InvalidInputError):
        load_config(str(path))


def test_defaults_are_not_mutated(mock_config_file):
    load_config(mock_config_file)
    assert DEFAULT_CONFIG["map_defaults"]["width"] == 120
    settings = map_settings()
    settings["width"] = 1
    assert DEFAULT_CONFIG["map_defaults"]["width"] == 120


def test_integer_padding_is_read_as_float(temp_dir):
    path = temp_dir / "postmap.yaml"
    path.write_text("map_defaults:\n  padding_fraction: 0\n  uk_padding_fraction: 0.1\n")

    settings = map_settings(load_config(str(path)))
    assert settings["padding_fraction"] == 0.0
    assert isinstance(settings["padding_fraction"], float)
    assert settings["uk_padding_fraction"] == 0.1
