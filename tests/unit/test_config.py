"""Unit tests for configuration."""

from pathlib import Path

import pytest

from menulens.core.config import PREFERENCES_KEY, Config


class TestConfig:
    """Tests for environment-driven configuration."""

    def test_defaults(self):
        config = Config()
        assert config.scan.latency_seconds == 3.0
        assert config.camera.facing_mode == "environment"
        assert config.storage.preferences_key == PREFERENCES_KEY == "menulens-preferences"
        assert config.onboarding.variant == "guided"

    def test_from_env(self, monkeypatch, temp_dir):
        monkeypatch.setenv("MENULENS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MENULENS_LOG_FORMAT", "json")
        monkeypatch.setenv("MENULENS_SCAN_LATENCY", "0.5")
        monkeypatch.setenv("MENULENS_CAMERA_PERMISSION", "denied")
        monkeypatch.setenv("MENULENS_STORAGE", "memory")
        monkeypatch.setenv("MENULENS_DATA_PATH", str(temp_dir))
        monkeypatch.setenv("MENULENS_ONBOARDING", "intro")

        config = Config.from_env()
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.scan.latency_seconds == 0.5
        assert config.camera.simulated_permission == "denied"
        assert config.storage.backend == "memory"
        assert config.storage.base_path == Path(temp_dir)
        assert config.onboarding.variant == "intro"

    def test_rejects_invalid_values(self, monkeypatch):
        monkeypatch.setenv("MENULENS_ONBOARDING", "carousel")
        with pytest.raises(ValueError):
            Config.from_env()
