"""Unit tests for copying static assets into output directories."""

from __future__ import annotations

import logging
import shutil
import typing as typ

from inkwell.config import AssetsConfig
from inkwell.pipeline import sync_assets

if typ.TYPE_CHECKING:
    from pathlib import Path

    import pytest


def _write(path: Path, text: str = "x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_directory_sources_are_merged(tmp_path: Path) -> None:
    """Directory trees land under the configured assets folder."""
    _write(tmp_path / "images" / "logo.png")
    _write(tmp_path / "images" / "icons" / "star.svg")
    output = tmp_path / "dist"

    copied = sync_assets(AssetsConfig(source=(str(tmp_path / "images"),)), output)

    assert copied == [tmp_path / "images"], f"Unexpected copied list {copied!r}"
    assert (output / "assets" / "logo.png").is_file(), "logo.png not copied"
    assert (output / "assets" / "icons" / "star.svg").is_file(), "nested not copied"


def test_file_sources_are_copied_into_destination(tmp_path: Path) -> None:
    """A single file source keeps its name inside the destination folder."""
    _write(tmp_path / "favicon.ico")
    output = tmp_path / "dist"

    sync_assets(
        AssetsConfig(source=(str(tmp_path / "favicon.ico"),), destination="static"),
        output,
    )

    assert (output / "static" / "favicon.ico").is_file(), "favicon.ico not copied"


def test_missing_and_empty_sources_are_skipped(tmp_path: Path) -> None:
    """Absent sources do not fail the build and create nothing."""
    output = tmp_path / "dist"
    copied = sync_assets(AssetsConfig(source=("", str(tmp_path / "nope"))), output)
    assert copied == [], "Nothing should be copied"
    assert not output.exists(), "No output directory should be created"


def test_copy_failures_are_logged(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Copy errors are reported as warnings instead of aborting."""
    _write(tmp_path / "images" / "logo.png")

    def _fail(*args: object, **kwargs: object) -> None:
        msg = "disk full"
        raise OSError(msg)

    monkeypatch.setattr(shutil, "copytree", _fail)
    with caplog.at_level(logging.WARNING, logger="inkwell.pipeline.assets"):
        copied = sync_assets(
            AssetsConfig(source=(str(tmp_path / "images"),)), tmp_path / "dist"
        )

    assert copied == [], "Failed copies should not be reported as copied"
    assert "disk full" in caplog.text, f"Expected warning, got {caplog.text!r}"
