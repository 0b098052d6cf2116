"""Unit tests for the shared stylesheet compiler."""

from __future__ import annotations

from pathlib import Path

import pytest

from inkwell.config import BuildConfig, CssConfig
from inkwell.render import StylesheetCompiler, compile_css, minify_css


def test_sources_are_concatenated_in_order(tmp_path: Path) -> None:
    """Stylesheet sources appear in declaration order."""
    first = tmp_path / "base.css"
    second = tmp_path / "theme.css"
    first.write_text("body { margin: 0; }\n", encoding="utf-8")
    second.write_text("a { color: red; }\n", encoding="utf-8")

    css = StylesheetCompiler(CssConfig(source=[first, second])).compile()

    assert css == "body { margin: 0; }\na { color: red; }", f"Got {css!r}"


def test_missing_stylesheet_raises(tmp_path: Path) -> None:
    """A configured stylesheet that does not exist is a build error."""
    compiler = StylesheetCompiler(CssConfig(source=[tmp_path / "missing.css"]))
    with pytest.raises(FileNotFoundError, match="missing.css"):
        compiler.compile()


def test_pygments_rules_are_appended() -> None:
    """A configured Pygments style adds .codehilite rules."""
    css = StylesheetCompiler(CssConfig(pygments_style="monokai")).compile()
    assert ".codehilite" in css, "Expected code highlighting rules"


def test_minified_output(tmp_path: Path) -> None:
    """Minification strips comments and whitespace but keeps selectors intact."""
    source = tmp_path / "email.css"
    source.write_text(
        "/* header */\nul > li a:hover {\n  color: red;\n  margin: 0 auto;\n}\n",
        encoding="utf-8",
    )
    css = StylesheetCompiler(CssConfig(source=[source], minify=True)).compile()
    assert css == "ul>li a:hover{color:red;margin:0 auto}", f"Got {css!r}"


def test_precompiled_css_skips_compilation() -> None:
    """A precompiled stylesheet is used without reading any source."""
    config = BuildConfig(
        env="local",
        templates=[],
        compiled_css="p{}",
        css=CssConfig(source=[Path("does-not-exist.css")]),
    )
    assert compile_css(config) == "p{}", "Precompiled CSS should be returned"


def test_empty_configuration_compiles_to_nothing() -> None:
    """No sources and no style yield an empty stylesheet."""
    assert compile_css(BuildConfig(env="local", templates=[])) == "", "Expected ''"


def test_minify_css_handles_empty_input() -> None:
    """Minifying whitespace yields an empty string."""
    assert minify_css("  \n ") == "", "Expected empty output"
