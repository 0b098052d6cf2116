"""Derive plaintext companions from rendered HTML.

Templates can mark content for one output only: anything inside
``<plaintext>...</plaintext>`` appears only in the plaintext companion, and
anything inside ``<not-plaintext>...</not-plaintext>`` appears only in the
HTML. :func:`generate_plaintext` returns both the plaintext and the HTML with
those markers resolved, so callers must use the returned HTML for output.

Example
-------
>>> result = generate_plaintext(
...     "<p>Hi<plaintext> there</plaintext></p>", "build/a.html", {}
... )
>>> result.html
'<p>Hi</p>'
>>> result.plaintext
'Hi there'
>>> result.destination.as_posix()
'build/a.txt'
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path, PurePath

from bs4 import BeautifulSoup, NavigableString

from inkwell._constants import DEFAULT_PLAINTEXT_EXTENSION
from inkwell.config.helpers import lookup

from .models import PlaintextResult

if typ.TYPE_CHECKING:
    import collections.abc as cabc

PLAINTEXT_BLOCK = re.compile(
    r"<plaintext(?=[\s>/])[^>]*>.*?</plaintext\s*>", re.DOTALL | re.I
)
PLAINTEXT_TAG = re.compile(r"</?plaintext(?=[\s>/])[^>]*>", re.I)
NOT_PLAINTEXT_BLOCK = re.compile(
    r"<not-plaintext(?=[\s>/])[^>]*>.*?</not-plaintext\s*>", re.DOTALL | re.I
)
NOT_PLAINTEXT_TAG = re.compile(r"</?not-plaintext(?=[\s>/])[^>]*>", re.I)
INLINE_WHITESPACE = re.compile(r"[ \t\r\f\v\u00a0]+")
INVISIBLE_CHARS = re.compile(r"[\u200b\u200c\u200d\ufeff]")

DROPPED_TAGS = ["head", "title", "style", "script", "noscript"]
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "div", "dl", "dt", "dd",
    "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "ol",
    "p", "pre", "section", "table", "tr", "ul",
]  # fmt: skip


def strip_plaintext_markup(html: str) -> str:
    """Drop plaintext-only blocks and unwrap HTML-only blocks."""
    without_plaintext = PLAINTEXT_BLOCK.sub("", html)
    return NOT_PLAINTEXT_TAG.sub("", without_plaintext)


def html_to_text(html: str) -> str:
    """Return a readable plaintext rendition of ``html``.

    Plaintext-only blocks are kept, HTML-only blocks are dropped, link targets
    are written next to their text, and blank-line runs collapse to one.
    """
    prepared = PLAINTEXT_TAG.sub("", NOT_PLAINTEXT_BLOCK.sub("", html))
    soup = BeautifulSoup(prepared, "html.parser")
    for tag in soup.find_all(DROPPED_TAGS):
        if not tag.decomposed:
            tag.decompose()
    for anchor in soup.find_all("a", href=True):
        anchor.replace_with(NavigableString(_describe_link(anchor)))
    for br in soup.find_all("br"):
        br.replace_with(NavigableString("\n"))
    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before(NavigableString("\n"))
        block.insert_after(NavigableString("\n"))
    for cell in soup.find_all(["td", "th"]):
        cell.insert_after(NavigableString(" "))

    text = INVISIBLE_CHARS.sub("", soup.get_text())
    lines = [INLINE_WHITESPACE.sub(" ", line).strip() for line in text.splitlines()]
    collapsed: list[str] = []
    for line in lines:
        if not line and (not collapsed or not collapsed[-1]):
            continue
        collapsed.append(line)
    return "\n".join(collapsed).strip()


def _describe_link(anchor: typ.Any) -> str:  # noqa: ANN401 - bs4 Tag
    text = INLINE_WHITESPACE.sub(" ", anchor.get_text()).strip()
    href = str(anchor.get("href", "")).strip()
    if not href or href.startswith("#") or href == text:
        return text or href
    if not text:
        return href
    return f"{text} [{href}]"


def resolve_plaintext_destination(
    destination: str | PurePath, options: cabc.Mapping[str, typ.Any]
) -> Path:
    """Return where the plaintext companion for ``destination`` is written.

    ``destination.path`` in ``options`` wins: with a file extension it names a
    single file, otherwise a directory receiving ``<source stem>.<extension>``.
    Without it, the ``permalink`` option (or ``destination`` itself) is used
    with its extension swapped for the plaintext extension.
    """
    extension = str(
        lookup(options, "destination.extension", DEFAULT_PLAINTEXT_EXTENSION)
    ).lstrip(".")
    configured = lookup(options, "destination.path")
    if configured:
        configured_path = Path(str(configured))
        if configured_path.suffix:
            return configured_path
        source = PurePath(str(options.get("filepath") or destination))
        return configured_path / f"{source.stem}.{extension}"

    target = Path(str(options.get("permalink") or destination))
    return target.with_suffix(f".{extension}")


def generate_plaintext(
    html: str, destination: str | PurePath, options: cabc.Mapping[str, typ.Any]
) -> PlaintextResult:
    """Produce the plaintext companion and the marker-free HTML for a template.

    Parameters
    ----------
    html : str
        Rendered HTML that may contain ``<plaintext>`` and ``<not-plaintext>``
        markers.
    destination : str or PurePath
        Output path of the HTML; the default plaintext path is derived from it.
    options : Mapping
        Plaintext settings merged with ``{"filepath": <source file>}``; reads
        ``destination.path``, ``destination.extension``, and ``permalink``.

    Returns
    -------
    PlaintextResult
        The HTML to ship, the plaintext, and the plaintext destination. Nothing
        is written to disk here.
    """
    return PlaintextResult(
        html=strip_plaintext_markup(html),
        plaintext=html_to_text(html),
        destination=resolve_plaintext_destination(destination, options),
    )


__all__ = [
    "generate_plaintext",
    "html_to_text",
    "resolve_plaintext_destination",
    "strip_plaintext_markup",
]
