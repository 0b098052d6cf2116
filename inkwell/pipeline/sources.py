"""Resolve a template entry's ``source`` into the files it should render.

A template entry's ``source`` may be a single path, a list of paths, or a
callable that receives the build configuration and returns either. Each
resulting source root is a single file (rendered as-is, whatever its
extension) or a directory searched recursively for the configured
``filetypes``.

Example
-------
>>> resolve_source_roots(["emails", "promos"], config=None)
['emails', 'promos']
>>> apply_skip(["build/a.html", "build/b.html"], ("a.html",), "build")
['build/b.html']
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path, PurePath

from inkwell.config.models import ConfigTypeError

if typ.TYPE_CHECKING:
    from inkwell.config import BuildConfig

SOURCE_TYPE_ERROR = "Invalid template source: expected string or list of strings, got "


def resolve_source_roots(source: object, config: BuildConfig | None) -> list[str]:
    """Return the source roots named by ``source``, in declaration order.

    Raises
    ------
    ConfigTypeError
        If ``source``, or the value a callable ``source`` returns, is not a
        string or a list of strings. The message names the type received.
    """
    match source:
        case str() | list() | tuple():
            return _literal_roots(source)
        case cabc.Callable():
            return _literal_roots(source(config))
        case _:
            raise ConfigTypeError(SOURCE_TYPE_ERROR + _describe_type(source))


def _literal_roots(value: object) -> list[str]:
    match value:
        case str():
            return [value]
        case list() | tuple() if all(isinstance(item, str) for item in value):
            return list(value)
        case _:
            raise ConfigTypeError(SOURCE_TYPE_ERROR + _describe_type(value))


def _describe_type(value: object) -> str:
    """Name ``value``'s type, including offending item types for sequences."""
    if isinstance(value, list | tuple):
        item_types = sorted(
            {type(item).__name__ for item in value if not isinstance(item, str)}
        )
        return f"{type(value).__name__}[{' | '.join(item_types)}]"
    return type(value).__name__


def iter_visible_files(root: Path, pattern: str = "*") -> list[Path]:
    """Return files under ``root`` matching ``pattern``, skipping dotfiles.

    Hidden files and anything inside hidden directories are ignored, and the
    result is sorted by POSIX path so discovery order is stable.
    """
    found: list[Path] = []
    for candidate in root.rglob(pattern):
        relative = candidate.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if candidate.is_file():
            found.append(candidate)
    return sorted(found, key=lambda path: path.as_posix())


def discover_templates(root: str, filetypes: cabc.Sequence[str]) -> list[str]:
    """Return candidate template paths for one source root.

    Parameters
    ----------
    root : str
        A file or directory path.
    filetypes : Sequence[str]
        Extensions (without dots) that mark a file as a template inside a
        directory root.

    Returns
    -------
    list[str]
        ``[root]`` when ``root`` is a file, regardless of ``filetypes``;
        otherwise every matching file below it as POSIX paths in discovery
        order. A missing root yields an empty list.
    """
    path = Path(root)
    if path.is_file():
        return [path.as_posix()]
    if not path.is_dir():
        return []
    suffixes = tuple(f".{ext}" for ext in filetypes)
    return [
        candidate.as_posix()
        for candidate in iter_visible_files(path)
        if candidate.name.endswith(suffixes)
    ]


def apply_skip(
    candidates: cabc.Sequence[str],
    skip: cabc.Iterable[str],
    output_dir: str | PurePath,
) -> list[str]:
    """Drop candidates listed in ``skip``.

    Each candidate is compared with the first ``"<output_dir>/"`` occurrence
    removed from its path.
    """
    skipped = set(skip)
    if not skipped:
        return list(candidates)
    prefix = f"{PurePath(output_dir).as_posix()}/"
    return [path for path in candidates if path.replace(prefix, "", 1) not in skipped]


__all__ = [
    "SOURCE_TYPE_ERROR",
    "apply_skip",
    "discover_templates",
    "iter_visible_files",
    "resolve_source_roots",
]
