"""Unit tests for pwsetup settings and GitHub Actions input mapping."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestSettings:
    """Core settings loading and override mechanics."""

    def test_defaults(self):
        from pwsetup.settings import get_settings

        s = get_settings()
        assert s.global_json_file == "global.json"
        assert s.dotnet_version == ""
        assert s.project_dir == "."
        assert s.search_depth == 3
        assert s.log_format == "text"
        assert s.install.browsers == "all"
        assert s.install.with_deps is False
        assert s.install.install_powershell is False
        assert s.install.timeout_sec == 1800

    def test_get_settings_is_cached(self):
        from pwsetup.settings import get_settings

        assert get_settings() is get_settings()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PWSETUP_DOTNET_VERSION", "9.0.x")
        from pwsetup.settings.config import Settings

        assert Settings().dotnet_version == "9.0.x"

    def test_nested_env_var_override_double_underscore(self, monkeypatch):
        monkeypatch.setenv("PWSETUP_INSTALL__WITH_DEPS", "true")
        monkeypatch.setenv("PWSETUP_INSTALL__BROWSERS", "chromium")
        from pwsetup.settings.config import Settings

        s = Settings()
        assert s.install.with_deps is True
        assert s.install.browsers == "chromium"

    def test_toml_file_layer(self, monkeypatch, tmp_path: Path):
        config = tmp_path / "pwsetup.toml"
        config.write_text('global_json_file = "src/global.json"\n\n[install]\nbrowsers = "webkit"\n')
        monkeypatch.setenv("PWSETUP_CONFIG_FILE", str(config))
        from pwsetup.settings.config import Settings

        s = Settings()
        assert s.global_json_file == "src/global.json"
        assert s.install.browsers == "webkit"
        assert s.install.with_deps is False

    def test_env_beats_toml(self, monkeypatch, tmp_path: Path):
        config = tmp_path / "pwsetup.toml"
        config.write_text('dotnet_version = "6.0"\n')
        monkeypatch.setenv("PWSETUP_CONFIG_FILE", str(config))
        monkeypatch.setenv("PWSETUP_DOTNET_VERSION", "8.0")
        from pwsetup.settings.config import Settings

        assert Settings().dotnet_version == "8.0"

    def test_explicit_values_beat_toml(self, monkeypatch, tmp_path: Path):
        config = tmp_path / "pwsetup.toml"
        config.write_text('[install]\nbrowsers = "webkit"\nwith_deps = true\n')
        monkeypatch.setenv("PWSETUP_CONFIG_FILE", str(config))
        from pwsetup.settings.config import Settings

        s = Settings(install={"browsers": "firefox"})
        assert s.install.browsers == "firefox"
        assert s.install.with_deps is True

    def test_invalid_log_format(self):
        from pwsetup.settings.config import Settings

        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_negative_search_depth_rejected(self):
        from pwsetup.settings.config import Settings

        with pytest.raises(ValidationError):
            Settings(search_depth=-1)


class TestActionConfig:
    def test_built_from_settings(self):
        from pwsetup.settings.config import Settings

        config = Settings(dotnet_version="8.0.x", install={"with_deps": True}).to_action_config()
        assert config.dotnet_version == "8.0.x"
        assert config.with_deps is True
        assert config.browsers == "all"
        assert config.search_depth == 3

    def test_frozen(self):
        from pwsetup.settings import ActionConfig

        config = ActionConfig()
        with pytest.raises(ValidationError):
            config.dotnet_version = "9.0"


class TestActionInputs:
    """INPUT_* environment variable handling."""

    def test_read_action_input(self):
        from pwsetup.settings import read_action_input

        env = {"INPUT_GLOBAL-JSON-FILE": "  src/global.json \n"}
        assert read_action_input("global-json-file", env) == "src/global.json"

    def test_missing_input_is_empty(self):
        from pwsetup.settings import read_action_input

        assert read_action_input("dotnet-version", {}) == ""

    def test_spaces_become_underscores(self):
        from pwsetup.settings import read_action_input

        assert read_action_input("my input", {"INPUT_MY_INPUT": "x"}) == "x"

    def test_reads_process_environment_by_default(self, monkeypatch):
        from pwsetup.settings import read_action_input

        monkeypatch.setenv("INPUT_BROWSERS", "chromium")
        assert read_action_input("browsers") == "chromium"

    def test_inputs_from_environment(self):
        from pwsetup.settings import inputs_from_environment

        env = {
            "INPUT_GLOBAL-JSON-FILE": "global.json",
            "INPUT_DOTNET-VERSION": "8.0.x",
            "INPUT_BROWSERS": "chromium firefox",
            "INPUT_WITH-DEPS": "true",
            "INPUT_INSTALL-POWERSHELL": "false",
        }
        assert inputs_from_environment(env) == {
            "global_json_file": "global.json",
            "dotnet_version": "8.0.x",
            "install": {"browsers": "chromium firefox", "with_deps": True, "install_powershell": False},
        }

    def test_boolean_inputs_require_exact_true(self):
        from pwsetup.settings import inputs_from_environment

        assert inputs_from_environment({"INPUT_WITH-DEPS": "TRUE"}) == {"install": {"with_deps": False}}

    def test_empty_inputs_are_omitted(self):
        from pwsetup.settings import inputs_from_environment

        assert inputs_from_environment({"INPUT_DOTNET-VERSION": "", "INPUT_BROWSERS": "  "}) == {}

    def test_inputs_feed_settings(self):
        from pwsetup.settings import Settings, inputs_from_environment

        s = Settings(**inputs_from_environment({"INPUT_WITH-DEPS": "true", "INPUT_BROWSERS": "webkit"}))
        assert s.install.with_deps is True
        assert s.install.browsers == "webkit"
