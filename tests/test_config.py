"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

from shadergrammar.cli import build_parser, load_config, resolve_options


def _resolve(tmp_path: Path, *extra: str):
    doc = tmp_path / "a.hlsl"
    doc.write_text("")
    ns = build_parser().parse_args([str(doc), *extra])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[highlight]\nlanguage = "sdsl"\n')
        result = load_config(cfg, tmp_path)
        assert result["highlight"] == {"language": "sdsl"}

    def test_auto_discover(self, tmp_path: Path) -> None:
        cfg = tmp_path / "shadergrammar.toml"
        cfg.write_text('[highlight]\nformat = "json"\n')
        result = load_config(None, tmp_path)
        assert result["highlight"] == {"format": "json"}


class TestConfigMerge:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path)
        assert opts.language is None
        assert opts.output_format == "html"
        assert opts.class_prefix == "hljs-"
        assert opts.strict is False
        assert opts.css_files == []

    def test_config_values(self, tmp_path: Path) -> None:
        (tmp_path / "shadergrammar.toml").write_text(
            "[highlight]\n"
            'language = "sdsl"\n'
            'format = "json"\n'
            'class_prefix = "x-"\n'
            "strict = true\n"
        )
        opts = _resolve(tmp_path)
        assert opts.language == "sdsl"
        assert opts.output_format == "json"
        assert opts.class_prefix == "x-"
        assert opts.strict is True

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "shadergrammar.toml").write_text(
            '[highlight]\nlanguage = "sdsl"\nformat = "json"\nclass_prefix = "x-"\n'
        )
        opts = _resolve(tmp_path, "-l", "hlsl", "-f", "html", "--class-prefix", "y-")
        assert opts.language == "hlsl"
        assert opts.output_format == "html"
        assert opts.class_prefix == "y-"

    def test_unknown_format_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "shadergrammar.toml").write_text('[highlight]\nformat = "pdf"\n')
        assert _resolve(tmp_path).output_format == "html"

    def test_non_bool_strict_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "shadergrammar.toml").write_text('[highlight]\nstrict = "no"\n')
        assert _resolve(tmp_path).strict is False
        assert _resolve(tmp_path, "--strict").strict is True

    def test_config_css_and_cli_css(self, tmp_path: Path) -> None:
        (tmp_path / "shadergrammar.toml").write_text('[css]\nfiles = ["base.css"]\n')
        opts = _resolve(tmp_path, "--css", "extra.css")
        assert opts.css_files == ["base.css", "extra.css"]

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text('[highlight]\nlanguage = "sdsl"\n')
        opts = _resolve(tmp_path, "--config", str(cfg))
        assert opts.language == "sdsl"

    def test_stdin_input(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "shadergrammar.toml").write_text('[highlight]\nlanguage = "sdsl"\n')
        ns = build_parser().parse_args(["-"])
        opts = resolve_options(ns)
        assert opts.input_file is None
        assert opts.language == "sdsl"
