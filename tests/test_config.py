"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from spatch.config.loader import ConfigError, load_config, validate_config
from spatch.config.schema import SpatchConfig


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.split.mode == "patch"
        assert cfg.split.only == "all"
        assert cfg.output.directory == "."
        assert cfg.output.on_collision == "overwrite"
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        toml_path = tmp_path / ".spatch.toml"
        toml_path.write_text(
            'version = "1.0"\n'
            '[split]\n'
            'mode = "file"\n'
            'only = "new"\n'
            '[filter]\n'
            'glob = "*.c"\n'
            '[output]\n'
            'on_collision = "suffix"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.split.mode == "file"
        assert cfg.split.only == "new"
        assert cfg.filter.glob == "*.c"
        assert cfg.output.on_collision == "suffix"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".spatch.toml").write_text('[output]\ncolour = "always"\n')
        cfg = load_config(tmp_path)
        assert cfg.output.format == "terminal"

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.output.format == "json"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        bad_toml = tmp_path / ".spatch.toml"
        bad_toml.write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".spatch.toml").write_text('split = "patch"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_choice_raises(self, tmp_path: Path):
        (tmp_path / ".spatch.toml").write_text('[output]\non_collision = "merge"\n')
        with pytest.raises(ConfigError, match="on_collision"):
            load_config(tmp_path)


class TestValidation:
    def test_defaults_valid(self):
        validate_config(SpatchConfig())

    def test_glob_and_regex_exclusive(self):
        cfg = SpatchConfig()
        cfg.filter.glob = "*.c"
        cfg.filter.regex = r"\.c$"
        with pytest.raises(ConfigError):
            validate_config(cfg)

    def test_file_mode_needs_selection(self):
        cfg = SpatchConfig()
        cfg.split.mode = "file"
        with pytest.raises(ConfigError):
            validate_config(cfg)
        cfg.split.only = "removed"
        validate_config(cfg)


class TestEnvVarOverrides:
    def test_output_dir_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SPATCH_OUTPUT_DIR", "/tmp/patches")
        cfg = load_config(tmp_path)
        assert cfg.output.directory == "/tmp/patches"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SPATCH_FORMAT", "json")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "json"

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".spatch.toml").write_text('[output]\non_collision = "suffix"\n')
        monkeypatch.setenv("SPATCH_ON_COLLISION", "error")
        cfg = load_config(tmp_path)
        assert cfg.output.on_collision == "error"

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SPATCH_ON_COLLISION", "merge")
        cfg = load_config(tmp_path)
        assert cfg.output.on_collision == "overwrite"  # default unchanged
