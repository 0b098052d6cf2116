"""Utility helpers shared by the inkwell configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from inkwell._constants import DEFAULT_FILETYPES

_MISSING = object()


def merge_config(*mappings: cabc.Mapping[str, typ.Any] | None) -> dict[str, typ.Any]:
    """Deep-merge ``mappings`` left to right into a new dictionary.

    Nested mappings are merged recursively, two lists under the same key are
    concatenated, and any other value from a later mapping replaces the
    earlier one. Inputs are never mutated.

    Examples
    --------
    >>> merge_config({"a": {"b": 1}, "l": [1]}, {"a": {"c": 2}, "l": [2]})
    {'a': {'b': 1, 'c': 2}, 'l': [1, 2]}
    """
    merged: dict[str, typ.Any] = {}
    for mapping in mappings:
        if not mapping:
            continue
        for key, value in mapping.items():
            existing = merged.get(key, _MISSING)
            match existing, value:
                case cabc.Mapping(), cabc.Mapping():
                    merged[key] = merge_config(existing, value)
                case list(), list():
                    merged[key] = [*existing, *_copy_value(value)]
                case _:
                    merged[key] = _copy_value(value)
    return merged


def _copy_value(value: typ.Any) -> typ.Any:  # noqa: ANN401 - arbitrary config
    """Copy plain containers so merged output never aliases its inputs."""
    if isinstance(value, cabc.Mapping):
        return merge_config(value)
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    return value


def lookup(
    mapping: cabc.Mapping[str, typ.Any] | None,
    dotted_key: str,
    default: typ.Any = None,  # noqa: ANN401 - arbitrary config
) -> typ.Any:  # noqa: ANN401 - arbitrary config
    """Return the value at ``dotted_key`` inside nested mappings, or ``default``.

    Examples
    --------
    >>> lookup({"destination": {"path": "dist"}}, "destination.path")
    'dist'
    >>> lookup({"destination": "dist"}, "destination.path", "build")
    'build'
    """
    current: typ.Any = mapping
    for part in dotted_key.split("."):
        if not isinstance(current, cabc.Mapping) or part not in current:
            return default
        current = current[part]
    return current


def _as_str_tuple(value: object, *, field: str) -> tuple[str, ...]:
    """Normalize a string-or-list config value into a tuple of strings."""
    match value:
        case None | "":
            return ()
        case str():
            return (value,)
        case list() | tuple():
            return tuple(str(item) for item in value if item not in (None, ""))
        case _:
            msg = f"'{field}' must be a string or a list of strings."
            raise TypeError(msg)


def _normalize_extensions(value: object) -> tuple[str, ...]:
    """Return extensions without leading dots, defaulting to ``html``.

    Entries may hold several extensions joined with ``|``.

    Examples
    --------
    >>> _normalize_extensions("html|.njk")
    ('html', 'njk')
    """
    extensions = tuple(
        ext.strip().lstrip(".")
        for entry in _as_str_tuple(value, field="filetypes")
        for ext in entry.split("|")
        if ext.strip()
    )
    return extensions or DEFAULT_FILETYPES


__all__ = [
    "_as_str_tuple",
    "_normalize_extensions",
    "lookup",
    "merge_config",
]
