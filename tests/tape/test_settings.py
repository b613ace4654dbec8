"""Tests for Tape settings."""

import json

import pytest

from tape import TapeSettings


class TestTapeSettings:
    """Test settings defaults, validation and persistence."""

    def test_defaults(self):
        """Test default values."""
        settings = TapeSettings.create_default()
        assert settings.max_call_depth == 200
        assert settings.max_loop_depth == 64
        assert settings.sleep_unit_ms == 100
        assert settings.show_error_context is True

    @pytest.mark.parametrize("kwargs", [
        {"max_call_depth": -1},
        {"max_call_depth": "10"},
        {"max_call_depth": True},
        {"max_loop_depth": -1},
        {"max_loop_depth": 2.0},
        {"sleep_unit_ms": -5},
        {"sleep_unit_ms": 1.5},
        {"show_error_context": "yes"},
    ])
    def test_invalid_values(self, kwargs):
        """Test that invalid values are rejected."""
        with pytest.raises(ValueError):
            TapeSettings(**kwargs)

    def test_save_and_load(self, tmp_path):
        """Test that saved settings load back unchanged."""
        path = tmp_path / "tape.json"
        settings = TapeSettings(max_call_depth=20, max_loop_depth=8, sleep_unit_ms=0, show_error_context=False)
        settings.save(str(path))

        assert json.loads(path.read_text(encoding='utf-8')) == {
            "max_call_depth": 20,
            "max_loop_depth": 8,
            "sleep_unit_ms": 0,
            "show_error_context": False,
        }
        assert TapeSettings.load(str(path)) == settings

    def test_load_partial_file_uses_defaults(self, tmp_path):
        """Test that missing keys keep their defaults."""
        path = tmp_path / "tape.json"
        path.write_text('{"sleep_unit_ms": 10}', encoding='utf-8')
        settings = TapeSettings.load(str(path))
        assert settings.sleep_unit_ms == 10
        assert settings.max_call_depth == 200
        assert settings.max_loop_depth == 64
        assert settings.show_error_context is True

    def test_load_missing_file(self, tmp_path):
        """Test loading a file that does not exist."""
        with pytest.raises(FileNotFoundError):
            TapeSettings.load(str(tmp_path / "missing.json"))

    def test_load_invalid_json(self, tmp_path):
        """Test loading a file that is not JSON."""
        path = tmp_path / "tape.json"
        path.write_text("{not json", encoding='utf-8')
        with pytest.raises(json.JSONDecodeError):
            TapeSettings.load(str(path))

    def test_load_non_object(self, tmp_path):
        """Test loading JSON that is not an object."""
        path = tmp_path / "tape.json"
        path.write_text("[1, 2]", encoding='utf-8')
        with pytest.raises(ValueError, match="JSON object"):
            TapeSettings.load(str(path))

    def test_load_invalid_value(self, tmp_path):
        """Test loading a file with an out-of-range value."""
        path = tmp_path / "tape.json"
        path.write_text('{"max_call_depth": -3}', encoding='utf-8')
        with pytest.raises(ValueError, match="max_call_depth"):
            TapeSettings.load(str(path))
