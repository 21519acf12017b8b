"""Unit tests for Config (crateforge.config).

Tests cover:
- Defaults and validation
- save/load round trip
- from_env
- ensure_directories
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from crateforge.config import Config


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.label == "generated by crateforge"
        assert config.workspace_dir == Path("./tmp")
        assert config.content_dir == Path("./starters")
        assert config.max_identity_attempts == 32
        assert config.log_level == "INFO"

    @pytest.mark.unit
    def test_frozen(self):
        config = Config()
        with pytest.raises(ValidationError):
            config.label = "changed"

    @pytest.mark.unit
    def test_zero_attempts_rejected(self):
        with pytest.raises(ValidationError):
            Config(max_identity_attempts=0)

    @pytest.mark.unit
    def test_multiline_label_rejected(self):
        with pytest.raises(ValidationError):
            Config(label="one\ntwo")

    @pytest.mark.unit
    def test_log_level_normalised(self):
        assert Config(log_level=" debug ").log_level == "DEBUG"

    @pytest.mark.unit
    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Config(log_level="chatty")


class TestConfigPersistence:
    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = Config(label="custom", workspace_dir=tmp_path / "ws", max_identity_attempts=5)
        path = config.save(tmp_path / "nested" / "config.json")
        assert path.exists()
        assert Config.load(path) == config


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_empty_env_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Config.from_env() == Config()

    @pytest.mark.unit
    def test_reads_variables(self):
        env = {
            "CRATEFORGE_LABEL": "from env",
            "CRATEFORGE_WORKSPACE": "/var/tmp/crateforge",
            "CRATEFORGE_CONTENT": "/srv/starters",
            "CRATEFORGE_MAX_IDENTITY_ATTEMPTS": "7",
            "CRATEFORGE_LOG_LEVEL": "warning",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.label == "from env"
        assert config.workspace_dir == Path("/var/tmp/crateforge")
        assert config.content_dir == Path("/srv/starters")
        assert config.max_identity_attempts == 7
        assert config.log_level == "WARNING"

    @pytest.mark.unit
    def test_bad_attempts_value(self):
        with patch.dict(os.environ, {"CRATEFORGE_MAX_IDENTITY_ATTEMPTS": "many"}, clear=True):
            with pytest.raises(ValueError):
                Config.from_env()


class TestEnsureDirectories:
    @pytest.mark.unit
    def test_creates_workspace(self, tmp_path: Path):
        config = Config(workspace_dir=tmp_path / "a" / "b")
        config.ensure_directories()
        assert (tmp_path / "a" / "b").is_dir()
