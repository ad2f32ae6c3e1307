"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from focusedit.cli import build_parser, load_config, main, resolve_options
from focusedit.errors import ConfigError


def _options(tmp_path: Path, *extra: str):
    doc = tmp_path / "main.fx"
    doc.write_text("")
    ns = build_parser().parse_args([str(doc), *extra])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[indent]\nstyle = "tabs"\n')
        assert load_config(cfg, tmp_path)["indent"] == {"style": "tabs"}

    def test_auto_discover_focusedit_toml(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text("[indent]\nsize = 2\n")
        assert load_config(None, tmp_path)["indent"] == {"size": 2}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "focusedit.toml"
        cfg.write_text("[indent\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(None, tmp_path)
        assert exc_info.value.path == cfg


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = _options(tmp_path)
        assert opts.unit.text == "    "
        assert opts.format == "text"

    def test_config_indent_size(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text("[indent]\nsize = 2\n")
        assert _options(tmp_path).unit.text == "  "

    def test_config_tabs(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text('[indent]\nstyle = "tabs"\n')
        assert _options(tmp_path).unit.text == "\t"

    def test_cli_overrides_config_size(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text("[indent]\nsize = 2\n")
        assert _options(tmp_path, "--indent-size", "3").unit.text == "   "

    def test_cli_tabs_override_config_spaces(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text('[indent]\nstyle = "spaces"\n')
        assert _options(tmp_path, "--tabs").unit.text == "\t"

    def test_config_format_and_cli_override(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text('[output]\nformat = "json"\n')
        assert _options(tmp_path).format == "json"
        assert _options(tmp_path, "-f", "text").format == "text"

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[indent]\nsize = 8\n")
        assert _options(tmp_path, "--config", str(cfg)).unit.text == " " * 8


class TestConfigErrors:
    def test_bad_style(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text('[indent]\nstyle = "both"\n')
        with pytest.raises(ConfigError) as exc_info:
            _options(tmp_path)
        assert exc_info.value.key == "indent.style"

    @pytest.mark.parametrize("value", ["0", "-1", '"four"', "true"])
    def test_bad_size(self, tmp_path: Path, value: str) -> None:
        (tmp_path / "focusedit.toml").write_text(f"[indent]\nsize = {value}\n")
        with pytest.raises(ConfigError) as exc_info:
            _options(tmp_path)
        assert exc_info.value.key == "indent.size"

    def test_bad_format(self, tmp_path: Path) -> None:
        (tmp_path / "focusedit.toml").write_text('[output]\nformat = "xml"\n')
        with pytest.raises(ConfigError):
            _options(tmp_path)

    def test_message_names_file_and_key(self, tmp_path: Path) -> None:
        cfg = tmp_path / "focusedit.toml"
        cfg.write_text('[indent]\nstyle = "both"\n')
        with pytest.raises(ConfigError) as exc_info:
            _options(tmp_path)
        assert str(exc_info.value).startswith("error: indent style must be")
        assert f"--> {cfg} [indent.style]" in str(exc_info.value)

    def test_main_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "focusedit.toml").write_text('[output]\nformat = "xml"\n')
        doc = tmp_path / "main.fx"
        doc.write_text("x")
        assert main([str(doc)]) == 2
        assert "output format" in capsys.readouterr().err
