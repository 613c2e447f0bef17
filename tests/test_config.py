"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from relnotes.config.defaults import DEFAULT_TOML
from relnotes.config.loader import ConfigError, load_config
from relnotes.diff.models import RenderOptions


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.release.max_body_length == 125000
        assert cfg.release.changelog_file == "CHANGELOG.md"
        assert cfg.render.indent_width == 8
        assert cfg.commits.collapse_after == 3

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".relnotes.toml").write_text(
            'version = "1.0"\n'
            "[release]\n"
            "max_body_length = 5000\n"
            "[render]\n"
            "indent_width = 4\n"
            "wide_char_width = 2.0\n",
            encoding="utf-8",
        )
        cfg = load_config(tmp_path)
        assert cfg.release.max_body_length == 5000
        assert cfg.render.options() == RenderOptions(indent_width=4, wide_char_width=2.0)

    def test_starter_template_loads(self, tmp_path: Path):
        (tmp_path / ".relnotes.toml").write_text(DEFAULT_TOML, encoding="utf-8")
        cfg = load_config(tmp_path)
        assert cfg.commits.time_label == " (北京时间)"
        assert cfg.release.unshallow is True

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".relnotes.toml").write_text("[render]\nbogus = 1\n", encoding="utf-8")
        assert load_config(tmp_path).render.indent_width == 8

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text("[commits]\ncollapse_after = 10\n", encoding="utf-8")
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.commits.collapse_after == 10

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".relnotes.toml").write_text("this is not valid [toml", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".relnotes.toml").write_text('render = "wide"\n', encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_indent_raises(self, tmp_path: Path):
        (tmp_path / ".relnotes.toml").write_text("[render]\nindent_width = 0\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_max_body_length(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RELNOTES_MAX_BODY_LENGTH", "60000")
        assert load_config(tmp_path).release.max_body_length == 60000

    def test_invalid_max_body_length_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RELNOTES_MAX_BODY_LENGTH", "lots")
        assert load_config(tmp_path).release.max_body_length == 125000

    def test_changelog_and_api_url(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RELNOTES_CHANGELOG", "docs/CHANGES.md")
        monkeypatch.setenv("RELNOTES_API_URL", "https://ghe.example.com/api/v3")
        cfg = load_config(tmp_path)
        assert cfg.release.changelog_file == "docs/CHANGES.md"
        assert cfg.github.api_url == "https://ghe.example.com/api/v3"
