"""
Tests for settings management module.

The autouse isolated_settings fixture points SEEDGRAPH_CONFIG at a temp file.
"""

import json
import os
from unittest.mock import patch

from seedgraph.utils import settings
from seedgraph.utils.settings import Settings, get_settings, save_settings


class TestSettings:
    """Tests for Settings dataclass"""

    def test_default_values(self):
        """Settings should have correct default values"""
        s = Settings()
        assert s.id_counter_width == 6
        assert s.id_separator == "-"
        assert s.database_path == ":memory:"

    def test_custom_values(self):
        """Settings can be initialized with custom values"""
        s = Settings(id_counter_width=10)
        assert s.id_counter_width == 10


class TestSettingsSave:
    """Tests for Settings.save() method"""

    def test_save_creates_directory_and_writes_file(self, tmp_path):
        """save() should create config directory and write JSON file"""
        config_file = tmp_path / "config" / "settings.json"

        Settings(id_counter_width=8).save(str(config_file))

        assert config_file.exists()
        data = json.loads(config_file.read_text())
        assert data == {
            "id_counter_width": 8,
            "id_separator": "-",
            "database_path": ":memory:",
        }

    def test_save_defaults_to_env_path(self, tmp_path):
        """Without a path, save() writes to SEEDGRAPH_CONFIG"""
        Settings(id_separator="_").save()

        data = json.loads((tmp_path / "settings.json").read_text())
        assert data["id_separator"] == "_"

    def test_config_file_falls_back_to_home(self, monkeypatch):
        """Without SEEDGRAPH_CONFIG the file lives under ~/.config/seedgraph"""
        monkeypatch.delenv(settings.CONFIG_ENV, raising=False)
        assert settings.get_config_file() == settings.CONFIG_FILE
        assert settings.CONFIG_FILE.endswith(os.path.join("seedgraph", "settings.json"))


class TestSettingsLoad:
    """Tests for Settings.load() class method"""

    def test_load_returns_defaults_when_file_missing(self, tmp_path):
        """load() should return default settings when config file doesn't exist"""
        s = Settings.load(str(tmp_path / "nonexistent" / "settings.json"))
        assert s == Settings()

    def test_load_reads_values(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text('{"id_counter_width": 3, "database_path": "seed.duckdb"}')

        s = Settings.load(str(config_file))

        assert s.id_counter_width == 3
        assert s.database_path == "seed.duckdb"
        assert s.id_separator == "-"

    def test_load_ignores_unknown_fields(self, tmp_path):
        """Obsolete keys in the file are dropped"""
        config_file = tmp_path / "settings.json"
        config_file.write_text('{"id_counter_width": 3, "legacy_option": true}')

        assert Settings.load(str(config_file)).id_counter_width == 3

    def test_load_returns_defaults_on_invalid_json(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text("{not json")

        assert Settings.load(str(config_file)) == Settings()

    def test_load_returns_defaults_on_non_object(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text("[1, 2]")

        assert Settings.load(str(config_file)) == Settings()


class TestGlobalSettings:
    """Tests for get_settings / save_settings"""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_save_settings_writes_global_instance(self, tmp_path):
        s = get_settings()
        s.id_counter_width = 9

        save_settings()

        data = json.loads((tmp_path / "settings.json").read_text())
        assert data["id_counter_width"] == 9

    def test_save_settings_without_instance_is_noop(self):
        with patch.object(settings, "_settings", None):
            with patch.object(Settings, "save") as mock_save:
                save_settings()
                mock_save.assert_not_called()
