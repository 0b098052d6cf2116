"""Render template sources with Jinja2 and per-file YAML front matter."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import markdown
from markupsafe import Markup
from ruamel.yaml import YAML

from inkwell.config.helpers import merge_config

from .models import RenderedTemplate

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import RenderContext

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")
MARKDOWN_EXTENSION_CONFIGS = {
    "codehilite": {"linenums": False, "guess_lang": False, "css_class": "codehilite"}
}


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return the parsed front matter mapping and the remaining template body.

    Examples
    --------
    >>> split_front_matter("---\\ntitle: Hi\\n---\\n<p>{{ page.title }}</p>")
    ({'title': 'Hi'}, '<p>{{ page.title }}</p>')
    >>> split_front_matter("<p>plain</p>")
    ({}, '<p>plain</p>')
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    loaded = loader.load(match.group(1)) or {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a YAML mapping."
        raise TypeError(msg)
    return dict(loaded), text[match.end() :]


def _markdown_filter(text: str) -> Markup:
    return Markup(
        markdown(
            text or "",
            extensions=list(MARKDOWN_EXTENSIONS),
            extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        )
    )


class TemplateRenderer:
    """Render raw template text into HTML plus its effective configuration."""

    def __init__(self, search_path: cabc.Sequence[Path] | None = None) -> None:
        """Initialize the Jinja environment used for every template of a build.

        Parameters
        ----------
        search_path : Sequence[Path], optional
            Directories searched by ``{% extends %}`` and ``{% include %}``.
            Defaults to the working directory.
        """
        self.search_path = list(search_path or [Path()])
        self.env = Environment(
            loader=FileSystemLoader([str(path) for path in self.search_path]),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["markdown"] = _markdown_filter

    def render(self, text: str, context: RenderContext) -> RenderedTemplate:
        """Render ``text`` for the file described by ``context``.

        Parameters
        ----------
        text : str
            Full template source, optionally starting with YAML front matter.
        context : RenderContext
            Build data, compiled CSS, hooks, and the current file's path
            components.

        Returns
        -------
        RenderedTemplate
            Rendered HTML and the effective config: the build data merged with
            the front matter when ``context.use_file_config`` is set.

        Raises
        ------
        jinja2.TemplateError
            If the template cannot be parsed or rendered.
        TypeError
            If the front matter is not a mapping.
        """
        front_matter, body = split_front_matter(text)
        if context.use_file_config:
            config = merge_config(context.page, front_matter)
        else:
            config = merge_config(context.page)

        hooks = context.hooks
        if hooks.before_render is not None:
            replaced = hooks.before_render(body, context)
            if isinstance(replaced, str):
                body = replaced

        template = self.env.from_string(body)
        html = template.render(
            page=config,
            env=context.env,
            css=Markup(context.css),
            current=context.current,
        )

        if hooks.after_render is not None:
            replaced = hooks.after_render(html, context)
            if isinstance(replaced, str):
                html = replaced

        return RenderedTemplate(html=html, config=config)


__all__ = ["FRONT_MATTER_PATTERN", "TemplateRenderer", "split_front_matter"]
