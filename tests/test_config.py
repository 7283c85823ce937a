"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from trunkdump.config.defaults import DEFAULT_TOML
from trunkdump.config.loader import ConfigError, load_config


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.parse.root == "trunk/"
        assert cfg.parse.verbosity == 1
        assert cfg.parse.tz_offset_minutes is None
        assert cfg.parse.on_io_error == "raise"
        assert cfg.filter.include == []
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        toml_path = tmp_path / ".trunkdump.toml"
        toml_path.write_text(
            'version = "1.0"\n'
            '[parse]\n'
            'root = "project/trunk"\n'
            'verbosity = 2\n'
            'tz_offset_minutes = -300\n'
            '[filter]\n'
            'include = ["src*"]\n'
            'exclude = ["docs*", "old.txt<40"]\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.parse.root == "project/trunk"
        assert cfg.parse.verbosity == 2
        assert cfg.parse.tz_offset_minutes == -300
        assert cfg.filter.include == ["src*"]
        assert cfg.filter.exclude == ["docs*", "old.txt<40"]

    def test_starter_template_loads(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text(DEFAULT_TOML)
        cfg = load_config(tmp_path)
        assert cfg.parse.root == "trunk/"
        assert cfg.output.show_nodes is True

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text('[parse]\ncolour = "blue"\n')
        assert load_config(tmp_path).parse.root == "trunk/"

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.output.format == "json"

    def test_filter_file_relative_to_config(self, tmp_path: Path):
        conf_dir = tmp_path / "conf"
        conf_dir.mkdir()
        custom = conf_dir / "custom.toml"
        custom.write_text('[filter]\nfile = "filters.yaml"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert Path(cfg.filter.file) == conf_dir / "filters.yaml"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text('parse = "trunk"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_bad_verbosity(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text("[parse]\nverbosity = 5\n")
        with pytest.raises(ConfigError, match="verbosity"):
            load_config(tmp_path)

    def test_bad_io_policy(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text('[parse]\non_io_error = "retry"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_filter_lists_must_be_lists(self, tmp_path: Path):
        (tmp_path / ".trunkdump.toml").write_text('[filter]\ninclude = "src*"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_root_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRUNKDUMP_ROOT", "main/")
        assert load_config(tmp_path).parse.root == "main/"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRUNKDUMP_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"

    def test_verbosity_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRUNKDUMP_VERBOSITY", "0")
        assert load_config(tmp_path).parse.verbosity == 0

    def test_filter_lists_extended(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".trunkdump.toml").write_text('[filter]\ninclude = ["src*"]\n')
        monkeypatch.setenv("TRUNKDUMP_INCLUDE", "lib*, build.xml>10")
        monkeypatch.setenv("TRUNKDUMP_EXCLUDE", "docs*")
        cfg = load_config(tmp_path)
        assert cfg.filter.include == ["src*", "lib*", "build.xml>10"]
        assert cfg.filter.exclude == ["docs*"]

    def test_tz_offset_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRUNKDUMP_TZ_OFFSET_MINUTES", "90")
        assert load_config(tmp_path).parse.tz_offset_minutes == 90

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRUNKDUMP_FORMAT", "xml")
        monkeypatch.setenv("TRUNKDUMP_VERBOSITY", "loud")
        monkeypatch.setenv("TRUNKDUMP_TZ_OFFSET_MINUTES", "soon")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "terminal"  # default unchanged
        assert cfg.parse.verbosity == 1
        assert cfg.parse.tz_offset_minutes is None
