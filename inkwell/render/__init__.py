"""Collaborators the compile pipeline calls for each build and each file."""

from .models import CurrentFile, PlaintextResult, RenderContext, RenderedTemplate
from .plaintext import generate_plaintext, html_to_text, strip_plaintext_markup
from .renderer import TemplateRenderer, split_front_matter
from .stylesheet import StylesheetCompiler, compile_css, minify_css

__all__ = [
    "CurrentFile",
    "PlaintextResult",
    "RenderContext",
    "RenderedTemplate",
    "StylesheetCompiler",
    "TemplateRenderer",
    "compile_css",
    "generate_plaintext",
    "html_to_text",
    "minify_css",
    "split_front_matter",
    "strip_plaintext_markup",
]
