"""Shared dataclasses used by the template compile pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from inkwell.render.models import RenderedTemplate


@dc.dataclass(slots=True)
class FileOutcome:
    """Result of the per-file render step.

    Exactly one of ``rendered`` and ``error`` is set; the driver decides from
    the build's fail policy whether an error skips the file or aborts.
    """

    file: str
    rendered: RenderedTemplate | None = None
    destination: str | None = None
    output_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Return True when the file rendered without raising."""
        return self.error is None


@dc.dataclass(slots=True)
class BuildManifest:
    """Accumulated record of everything one build produced or touched.

    Attributes
    ----------
    compiled : dict[str, str]
        Rendered HTML keyed by output base name; later files win on collision.
    files : list[str]
        Every touched path, without duplicates, in first-seen order.
    parsed : list[str]
        Successfully rendered source paths in processing order; a path
        rendered by two template entries appears twice.
    css : str
        The stylesheet compiled once for the build.
    """

    compiled: dict[str, str] = dc.field(default_factory=dict)
    files: list[str] = dc.field(default_factory=list)
    parsed: list[str] = dc.field(default_factory=list)
    css: str = ""
    _seen: set[str] = dc.field(
        default_factory=set, init=False, repr=False, compare=False
    )

    def record(self, name: str, html: str, source_file: str) -> None:
        """Record one rendered template."""
        self.compiled[name] = html
        self.touch([source_file])
        self.parsed.append(source_file)

    def touch(self, paths: cabc.Iterable[str]) -> None:
        """Union ``paths`` into ``files`` keeping first-seen order."""
        for path in paths:
            if path not in self._seen:
                self._seen.add(path)
                self.files.append(path)


__all__ = ["BuildManifest", "FileOutcome"]
