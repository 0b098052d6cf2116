"""Dataclasses exchanged between the compile pipeline and the renderer."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path, PurePath

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from inkwell.config import EventHooks


@dc.dataclass(slots=True, frozen=True)
class CurrentFile:
    """Parsed path components of the template being rendered.

    Attributes
    ----------
    path : str
        The path as discovered, e.g. ``"emails/welcome.html"``.
    root : str
        Anchor of the path (``"/"`` for absolute paths, else ``""``).
    dir : str
        Parent directory portion.
    base : str
        File name including extension.
    name : str
        File name without its final extension.
    ext : str
        Final extension including the dot.
    """

    path: str
    root: str
    dir: str
    base: str
    name: str
    ext: str

    @classmethod
    def from_path(cls, path: str | PurePath) -> CurrentFile:
        """Split ``path`` into its components."""
        pure = PurePath(path)
        parent = pure.parent.as_posix()
        return cls(
            path=pure.as_posix(),
            root=pure.anchor,
            dir="" if parent == "." else parent,
            base=pure.name,
            name=pure.stem,
            ext=pure.suffix,
        )


@dc.dataclass(slots=True, frozen=True)
class RenderContext:
    """Everything the renderer needs for one file, passed by value.

    Attributes
    ----------
    use_file_config : bool
        Merge the template's front matter into its effective config.
    page : Mapping
        Merged build configuration data with ``env`` attached.
    css : str
        Compiled stylesheet shared by every file of the build.
    hooks : EventHooks
        Render-time callbacks (``before_render``/``after_render``).
    current : CurrentFile
        Path components of the file being rendered.
    """

    use_file_config: bool
    page: cabc.Mapping[str, typ.Any]
    css: str
    hooks: EventHooks
    current: CurrentFile

    @property
    def env(self) -> str:
        """Return the build environment name."""
        return str(self.page.get("env", ""))


@dc.dataclass(slots=True)
class RenderedTemplate:
    """Rendered HTML plus the effective per-file configuration."""

    html: str
    config: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class PlaintextResult:
    """Output of plaintext generation for one template."""

    html: str
    plaintext: str
    destination: Path


__all__ = [
    "CurrentFile",
    "PlaintextResult",
    "RenderContext",
    "RenderedTemplate",
]
