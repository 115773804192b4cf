"""Tests for zonetrack.config."""

import pytest
from pydantic import ValidationError

from zonetrack.config import TrackerConfig, get_config_hash, load_config, validate_config


class TestLoadConfig:
    def test_defaults_without_path(self):
        config = load_config(None)
        assert config == TrackerConfig()
        assert config.default_target == 2
        assert config.autosave is True

    def test_defaults_when_file_missing(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == TrackerConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == TrackerConfig()

    def test_values_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "state_path: saves/run.json\ndefault_target: 5\ncolor: false\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.state_path == "saves/run.json"
        assert config.default_target == 5
        assert config.color is False

    def test_negative_default_target_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_target: -1\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)


class TestValidateConfig:
    def test_valid(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("title: Speedrun\n", encoding="utf-8")
        assert validate_config(path) == (True, [])

    def test_missing_file(self, tmp_path):
        is_valid, errors = validate_config(tmp_path / "none.yaml")
        assert not is_valid
        assert "not found" in errors[0]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("title: [unclosed\n", encoding="utf-8")
        is_valid, errors = validate_config(path)
        assert not is_valid
        assert "Invalid YAML" in errors[0]

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("colour: true\n", encoding="utf-8")
        is_valid, errors = validate_config(path)
        assert not is_valid
        assert any("colour" in e for e in errors)

    def test_bad_log_level(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: LOUD\n", encoding="utf-8")
        is_valid, errors = validate_config(path)
        assert not is_valid
        assert any(e.startswith("log_level") for e in errors)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert validate_config(path) == (False, ["Config must be a mapping"])


class TestConfigHash:
    def test_stable(self):
        assert get_config_hash(TrackerConfig()) == get_config_hash(TrackerConfig())
        assert len(get_config_hash(TrackerConfig())) == 12

    def test_changes_with_content(self):
        assert get_config_hash(TrackerConfig()) != get_config_hash(TrackerConfig(default_target=3))
