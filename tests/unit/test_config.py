"""
Unit tests for Config.
"""

import os
from pathlib import Path

import pytest
import yaml

from togglemaster.core.config import Config

PROJECT_CONFIG = Path(__file__).resolve().parents[2] / "config"


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "default.yaml").write_text(
        yaml.safe_dump(
            {
                "battery": {"threshold": 20},
                "storage": {"key_alias": "default-alias", "filename": "TogglePrefs.json"},
                "auth": {"enabled": True},
            }
        ),
        encoding="utf-8",
    )
    (tmp_path / "development.yaml").write_text(
        yaml.safe_dump({"auth": {"enabled": False}}), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TOGGLEMASTER_"):
            monkeypatch.delenv(key)


class TestConfig:
    def test_defaults(self, config_dir):
        config = Config(config_dir)

        assert config.env == "production"
        assert config.get("battery.threshold") == 20
        assert config["auth"]["enabled"] is True

    def test_environment_file_merges(self, config_dir, monkeypatch):
        monkeypatch.setenv("TOGGLEMASTER_ENV", "development")
        config = Config(config_dir)

        assert config.get("auth.enabled") is False
        assert config.get("battery.threshold") == 20

    def test_env_var_override_with_underscored_key(self, config_dir, monkeypatch):
        monkeypatch.setenv("TOGGLEMASTER_STORAGE__KEY_ALIAS", "from-env")
        monkeypatch.setenv("TOGGLEMASTER_BATTERY__THRESHOLD", "15")
        config = Config(config_dir)

        assert config.get("storage.key_alias") == "from-env"
        assert config.get("storage.filename") == "TogglePrefs.json"
        assert config.get("battery.threshold") == 15

    def test_env_selector_is_not_a_setting(self, config_dir, monkeypatch):
        monkeypatch.setenv("TOGGLEMASTER_ENV", "development")
        assert "env" not in Config(config_dir).as_dict

    def test_missing_key_returns_default(self, config_dir):
        config = Config(config_dir)

        assert config.get("gesture.swipe_threshold", 50) == 50
        assert config["widget"] == {}

    def test_reload_picks_up_env(self, config_dir, monkeypatch):
        config = Config(config_dir)
        monkeypatch.setenv("TOGGLEMASTER_BATTERY__THRESHOLD", "30")
        config.reload()

        assert config.get("battery.threshold") == 30

    def test_project_defaults_load(self):
        config = Config(PROJECT_CONFIG)

        assert config.get("storage.filename") == "TogglePrefs.json"
        assert config.get("battery.threshold") == 20
        assert config.get("gesture.swipe_threshold") == 50
        assert config.get("auth.title") == "ToggleMaster Security"
