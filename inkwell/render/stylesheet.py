"""Compile the single stylesheet shared by every template of a build."""

from __future__ import annotations

import re
import typing as typ

from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from inkwell.config import BuildConfig, CssConfig

COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
WHITESPACE_PATTERN = re.compile(r"\s+")
PUNCTUATION_PATTERN = re.compile(r"\s*([{};,>])\s*")
DECLARATION_COLON_PATTERN = re.compile(r":\s+")


class StylesheetCompiler:
    """Concatenate stylesheet sources and optional code-highlighting rules."""

    def __init__(self, css_config: CssConfig) -> None:
        self.css = css_config

    @property
    def highlight_rules(self) -> str:
        """Return the Pygments CSS for ``.codehilite`` blocks, if configured."""
        if not self.css.pygments_style:
            return ""
        formatter = HtmlFormatter(style=self.css.pygments_style, cssclass="codehilite")
        return formatter.get_style_defs(".codehilite")

    def compile(self) -> str:
        """Return the combined stylesheet.

        Raises
        ------
        FileNotFoundError
            If a configured stylesheet source does not exist.
        pygments.util.ClassNotFound
            If ``pygments_style`` names an unknown style.
        """
        chunks: list[str] = []
        for path in self.css.source:
            if not path.is_file():
                msg = f"Stylesheet '{path}' not found."
                raise FileNotFoundError(msg)
            chunks.append(path.read_text(encoding="utf-8"))
        chunks.append(self.highlight_rules)
        css = "\n".join(chunk.strip("\n") for chunk in chunks if chunk.strip())
        if self.css.minify:
            return minify_css(css)
        return css


def minify_css(css: str) -> str:
    """Strip comments and collapse whitespace in ``css``.

    Examples
    --------
    >>> minify_css("a {\\n  color: red;\\n}\\n/* note */")
    'a{color:red}'
    """
    stripped = COMMENT_PATTERN.sub("", css)
    collapsed = WHITESPACE_PATTERN.sub(" ", stripped)
    tightened = PUNCTUATION_PATTERN.sub(r"\1", collapsed)
    tightened = DECLARATION_COLON_PATTERN.sub(":", tightened)
    return tightened.replace(";}", "}").strip()


def compile_css(config: BuildConfig) -> str:
    """Return the precomputed stylesheet when configured, else compile one."""
    if isinstance(config.compiled_css, str):
        return config.compiled_css
    return StylesheetCompiler(config.css).compile()


__all__ = ["StylesheetCompiler", "compile_css", "minify_css"]
