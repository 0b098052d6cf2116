"""Unit tests for template source resolution and discovery."""

from __future__ import annotations

import typing as typ

import pytest

from inkwell.config import BuildConfig, ConfigTypeError
from inkwell.pipeline import apply_skip, discover_templates, resolve_source_roots

if typ.TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<p>x</p>", encoding="utf-8")


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("emails", ["emails"]),
        (["emails", "promos"], ["emails", "promos"]),
        (("emails",), ["emails"]),
        ([], []),
    ],
)
def test_literal_sources(source: object, expected: list[str]) -> None:
    """Strings and string sequences resolve to themselves."""
    assert resolve_source_roots(source, None) == expected, f"Failed for {source!r}"


def test_callable_source_receives_config() -> None:
    """A callable source is invoked with the build configuration."""
    config = BuildConfig(env="production", templates=[])
    seen: list[BuildConfig] = []

    def pick(received: BuildConfig) -> list[str]:
        seen.append(received)
        return [f"emails/{received.env}"]

    assert resolve_source_roots(pick, config) == ["emails/production"], (
        "Callable result should be used as the source roots"
    )
    assert seen == [config], "Callable should receive the build configuration"


@pytest.mark.parametrize(
    ("source", "type_name"),
    [
        (42, "int"),
        (None, "NoneType"),
        ({"path": "emails"}, "dict"),
        (["emails", 3], "list[int]"),
        (lambda _config: 42, "int"),
        (lambda _config: ["a", None], "list[NoneType]"),
    ],
)
def test_invalid_sources_raise(source: object, type_name: str) -> None:
    """Anything but a string or list of strings is a configuration type error."""
    with pytest.raises(ConfigTypeError) as excinfo:
        resolve_source_roots(source, BuildConfig(env="local", templates=[]))
    message = str(excinfo.value)
    assert message.startswith("Invalid template source"), f"Got {message!r}"
    assert message.endswith(type_name), f"Expected {type_name!r} in {message!r}"
    assert isinstance(excinfo.value, TypeError), "Should also be a TypeError"


def test_single_file_root_ignores_filetypes(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A file root is rendered whatever its extension."""
    monkeypatch.chdir(tmp_path)
    _touch(tmp_path / "emails" / "special.mjml")
    assert discover_templates("emails/special.mjml", ("html",)) == [
        "emails/special.mjml"
    ], "A single file root should be returned as-is"


def test_directory_root_is_searched_recursively(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Directory roots yield matching files in sorted order, skipping dotfiles."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "emails/b.html",
        "emails/a.html",
        "emails/nested/c.njk",
        "emails/notes.md",
        "emails/.drafts/d.html",
        "emails/.hidden.html",
    ):
        _touch(tmp_path / name)

    found = discover_templates("emails", ("html", "njk"))

    assert found == ["emails/a.html", "emails/b.html", "emails/nested/c.njk"], (
        f"Unexpected discovery result {found!r}"
    )


def test_missing_root_yields_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A root that does not exist has no candidates."""
    monkeypatch.chdir(tmp_path)
    assert discover_templates("nowhere", ("html",)) == [], "Expected no candidates"


def test_skip_strips_output_dir_prefix() -> None:
    """Skip entries are compared after removing the output directory prefix."""
    candidates = ["build_local/a.html", "emails/b.html", "emails/c.html"]
    kept = apply_skip(candidates, ("a.html", "emails/b.html"), "build_local")
    assert kept == ["emails/c.html"], f"Unexpected skip result {kept!r}"


def test_empty_skip_keeps_everything() -> None:
    """Without skip entries every candidate is kept."""
    candidates = ["emails/a.html"]
    assert apply_skip(candidates, (), "dist") == candidates, "Nothing should drop"
