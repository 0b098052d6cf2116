"""Typed dataclasses describing inkwell build configuration structures."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


class ConfigTypeError(BuildConfigError, TypeError):
    """Raised when a template ``source`` is not a string or list of strings."""


class MissingTemplatesError(BuildConfigError):
    """Raised when ``build.templates`` holds no template entry."""


class FailPolicy(enum.Enum):
    """How a single failing template affects the rest of the build."""

    SILENT = "silent"
    VERBOSE = "verbose"
    STRICT = "strict"

    @classmethod
    def from_value(cls, value: object) -> FailPolicy:
        """Map a raw ``build.fail`` value onto a policy, defaulting to strict."""
        match value:
            case FailPolicy():
                return value
            case "silent":
                return cls.SILENT
            case "verbose":
                return cls.VERBOSE
            case _:
                return cls.STRICT


@dc.dataclass(slots=True)
class AssetsConfig:
    """Static asset trees copied next to the rendered templates."""

    source: tuple[str, ...] = ()
    destination: str = "assets"


@dc.dataclass(slots=True)
class CssConfig:
    """Inputs for the stylesheet compiler."""

    source: list[Path] = dc.field(default_factory=list)
    pygments_style: str | None = None
    minify: bool = False


@dc.dataclass(slots=True)
class EventHooks:
    """Optional callbacks fired at fixed points of a build.

    Attributes
    ----------
    before_create : callable, optional
        Called with the :class:`BuildConfig` once per non-empty source root,
        before its files are rendered.
    after_build : callable, optional
        Called with the touched file list and the :class:`BuildConfig` after
        every template entry has been processed.
    before_render : callable, optional
        Called by the renderer with the raw template text and the render
        context; a returned string replaces the template text.
    after_render : callable, optional
        Called by the renderer with the rendered HTML and the render context;
        a returned string replaces the HTML.
    """

    before_create: cabc.Callable[[BuildConfig], object] | None = None
    after_build: cabc.Callable[[list[str], BuildConfig], object] | None = None
    before_render: cabc.Callable[[str, typ.Any], str | None] | None = None
    after_render: cabc.Callable[[str, typ.Any], str | None] | None = None


@dc.dataclass(slots=True)
class TemplateConfig:
    """One source-to-destination mapping from ``build.templates``.

    Attributes
    ----------
    source : str, list of str, or callable
        Source roots, or a callable receiving the :class:`BuildConfig` and
        returning them. Validated when the build resolves it.
    destination : Path
        Output directory for this entry.
    extension : str
        Extension given to rendered output files.
    filetypes : tuple[str, ...]
        Extensions (without dots) treated as templates inside directory roots.
    omit : tuple[str, ...]
        Parsed for compatibility; not applied by the source filter.
    skip : tuple[str, ...]
        Candidate paths excluded from rendering.
    assets : AssetsConfig
        Static trees copied into the output directory.
    plaintext : bool, mapping, or None
        Plaintext companion settings; ``None`` defers to each file's front
        matter.
    """

    source: typ.Any
    destination: Path
    extension: str = "html"
    filetypes: tuple[str, ...] = ("html",)
    omit: tuple[str, ...] = ()
    skip: tuple[str, ...] = ()
    assets: AssetsConfig = dc.field(default_factory=AssetsConfig)
    plaintext: bool | cabc.Mapping[str, typ.Any] | None = None


@dc.dataclass(slots=True)
class BuildConfig:
    """Root configuration for one build invocation.

    Attributes
    ----------
    env : str
        Environment name the configuration was resolved for.
    templates : list[TemplateConfig]
        Template entries processed in declaration order.
    fail : FailPolicy
        Per-file failure policy.
    compiled_css : str or None
        Precomputed stylesheet; when set the CSS compiler is not invoked.
    css : CssConfig
        Stylesheet compiler inputs.
    components : list[Path]
        Search path for templates pulled in with ``extends`` or ``include``.
    hooks : EventHooks
        Lifecycle callbacks.
    data : dict
        The merged raw configuration mapping, exposed to templates as ``page``.
    """

    env: str
    templates: list[TemplateConfig]
    fail: FailPolicy = FailPolicy.STRICT
    compiled_css: str | None = None
    css: CssConfig = dc.field(default_factory=CssConfig)
    components: list[Path] = dc.field(default_factory=lambda: [Path()])
    hooks: EventHooks = dc.field(default_factory=EventHooks)
    data: dict[str, typ.Any] = dc.field(default_factory=dict)


__all__ = [
    "AssetsConfig",
    "BuildConfig",
    "BuildConfigError",
    "ConfigTypeError",
    "CssConfig",
    "EventHooks",
    "FailPolicy",
    "MissingTemplatesError",
    "TemplateConfig",
]
