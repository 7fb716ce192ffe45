"""Command-line interface for shadergrammar."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shadergrammar.errors import IllegalSyntaxError, UnknownLanguageError
from shadergrammar.tokens import Token

FORMATS = ("html", "json", "terminal")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    language: str | None  # None auto-detects
    output_format: str
    class_prefix: str
    css_files: list[str]
    strict: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="shadergrammar",
        description="Highlight HLSL/SDSL shader source",
    )
    p.add_argument("input", help="Input shader file ('-' for stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-l",
        "--language",
        help="Language name or alias (default: auto-detect)",
    )
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: html)",
    )
    p.add_argument(
        "--class-prefix",
        default=None,
        metavar="PREFIX",
        help="CSS class prefix for html output (default: hljs-)",
    )
    p.add_argument(
        "--css",
        action="append",
        default=[],
        metavar="FILE",
        help="Stylesheet to link; produces a complete HTML page (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover shadergrammar.toml)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on illegal constructs instead of recovering",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "shadergrammar.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg = config.get("highlight")
    if not isinstance(cfg, dict):
        cfg = {}

    language = args.language
    if language is None and isinstance(cfg.get("language"), str):
        language = cfg["language"]

    output_format = "html"
    if cfg.get("format") in FORMATS:
        output_format = cfg["format"]
    if args.format is not None:
        output_format = args.format

    class_prefix = "hljs-"
    if isinstance(cfg.get("class_prefix"), str):
        class_prefix = cfg["class_prefix"]
    if args.class_prefix is not None:
        class_prefix = args.class_prefix

    strict = args.strict
    if isinstance(cfg.get("strict"), bool):
        strict = cfg["strict"] or args.strict

    # Stylesheets: config < CLI
    css_files: list[str] = []
    cfg_css = config.get("css")
    if isinstance(cfg_css, dict):
        cfg_css_files = cfg_css.get("files")
        if isinstance(cfg_css_files, list):
            css_files.extend(str(f) for f in cfg_css_files)
    css_files.extend(args.css)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        language=language,
        output_format=output_format,
        class_prefix=class_prefix,
        css_files=css_files,
        strict=strict,
        debug=args.debug,
    )


def highlight_source(source: str, options: CliOptions) -> str:
    """Tokenize *source* per *options* and format the result."""
    from shadergrammar.debug import dump_tokens
    from shadergrammar.highlighter import detect_language, highlight
    from shadergrammar.registry import default_registry
    from shadergrammar.render import render_block, render_document

    registry = default_registry()
    if options.language is None:
        result = detect_language(registry, source)
    else:
        result = highlight(registry, options.language, source, ignore_illegals=not options.strict)

    if options.debug:
        dump_tokens(result.tokens, file=sys.stderr)

    if options.output_format == "json":
        return json.dumps([_token_json(t) for t in result.tokens], indent=2) + "\n"

    if options.output_format == "terminal":
        import pygments
        from pygments.formatters.terminal256 import TerminalTrueColorFormatter

        from shadergrammar.pygments_lexer import pygments_token_type

        stream = ((pygments_token_type(t), t.text) for t in result.tokens)
        return pygments.format(stream, TerminalTrueColorFormatter())

    block = render_block(result.tokens, result.language, options.class_prefix)
    if options.css_files:
        title = options.input_file.name if options.input_file is not None else "stdin"
        return render_document(block, title, options.css_files)
    return block + "\n"


def _token_json(tok: Token) -> dict[str, object]:
    return {
        "category": tok.category.value if tok.category is not None else None,
        "scope": [c.value for c in tok.scope],
        "text": tok.text,
        "line": tok.span.start.line,
        "column": tok.span.start.column,
        "offset": tok.position,
        "relevance": tok.relevance,
    }


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    try:
        if options.input_file is None:
            source = sys.stdin.read()
        else:
            source = options.input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read input: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        output = highlight_source(source, options)
    except IllegalSyntaxError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except UnknownLanguageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
