"""Load build configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from inkwell._constants import (
    BASE_CONFIG_FILE,
    DEFAULT_ASSETS_DESTINATION,
    DEFAULT_ENV,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_OUTPUT_TEMPLATE,
    ENV_CONFIG_TEMPLATE,
    config_filename,
)

from .helpers import _as_str_tuple, _normalize_extensions, lookup, merge_config
from .models import (
    AssetsConfig,
    BuildConfig,
    BuildConfigError,
    CssConfig,
    EventHooks,
    FailPolicy,
    MissingTemplatesError,
    TemplateConfig,
)

_HOOK_ALIASES: dict[str, tuple[str, ...]] = {
    "before_create": ("beforeCreate", "before_create"),
    "after_build": ("afterBuild", "after_build"),
    "before_render": ("beforeRender", "before_render"),
    "after_render": ("afterRender", "after_render"),
}


def load_build_config(env: str = DEFAULT_ENV, root: Path | None = None) -> BuildConfig:
    """Load, merge, and parse the configuration for ``env``.

    Parameters
    ----------
    env : str, optional
        Environment name. ``"local"`` reads only ``config.yaml``; any other
        name also merges ``config.<env>.yaml`` on top of it.
    root : Path, optional
        Directory holding the config files. Defaults to the working directory.

    Returns
    -------
    BuildConfig
        Parsed configuration ready for :func:`inkwell.compile_templates`.

    Raises
    ------
    FileNotFoundError
        If a required configuration file does not exist.
    TypeError
        If a configuration file's top-level YAML structure is not a mapping.
    MissingTemplatesError
        If ``build.templates`` is missing or holds an empty entry.
    """
    raw = load_config_mapping(env, root)
    return build_config_from_mapping(raw, env)


def load_config_mapping(
    env: str = DEFAULT_ENV, root: Path | None = None
) -> dict[str, typ.Any]:
    """Return the merged raw mapping for ``env`` without parsing it."""
    base_dir = root or Path.cwd()
    merged = _read_yaml(base_dir / BASE_CONFIG_FILE)
    if env != DEFAULT_ENV:
        override = _read_yaml(base_dir / ENV_CONFIG_TEMPLATE.format(env=env))
        merged = merge_config(merged, override)
    return merged


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def build_config_from_mapping(
    raw: cabc.Mapping[str, typ.Any], env: str = DEFAULT_ENV
) -> BuildConfig:
    """Parse a raw (already merged) configuration mapping into a BuildConfig.

    The mapping may come from YAML or be assembled in Python, in which case
    template ``source`` values and ``events`` entries may be callables.

    Raises
    ------
    MissingTemplatesError
        If ``build.templates`` is missing, empty, or contains a falsy entry.
        The message names the config file the user should edit.
    BuildConfigError
        If a template entry is not a mapping.
    """
    data = merge_config(raw)
    templates_raw = lookup(raw, "build.templates")
    entries = templates_raw if isinstance(templates_raw, list) else [templates_raw]
    if not entries:
        entries = [None]

    templates: list[TemplateConfig] = []
    for entry in entries:
        if not entry:
            msg = (
                "No template sources defined in `build.templates`, "
                f"check your {config_filename(env)} file"
            )
            raise MissingTemplatesError(msg)
        if not isinstance(entry, cabc.Mapping):
            msg = f"Each `build.templates` entry must be a mapping, got {entry!r}."
            raise BuildConfigError(msg)
        templates.append(_build_template_config(entry, env))

    compiled_css = lookup(raw, "build.css.compiled")
    if compiled_css is None:
        compiled_css = lookup(raw, "build.tailwind.compiled")

    components = _as_str_tuple(
        lookup(raw, "build.components.root", "."), field="build.components.root"
    )

    return BuildConfig(
        env=env,
        templates=templates,
        fail=FailPolicy.from_value(lookup(raw, "build.fail")),
        compiled_css=compiled_css if isinstance(compiled_css, str) else None,
        css=_build_css_config(lookup(raw, "build.css", {}) or {}),
        components=[Path(item) for item in components] or [Path()],
        hooks=_build_event_hooks(raw.get("events") or {}),
        data=data,
    )


def _build_template_config(
    payload: cabc.Mapping[str, typ.Any], env: str
) -> TemplateConfig:
    """Build a TemplateConfig for a single ``build.templates`` entry."""
    destination = Path(
        lookup(payload, "destination.path", DEFAULT_OUTPUT_TEMPLATE.format(env=env))
    )
    extension = str(
        lookup(payload, "destination.extension", DEFAULT_OUTPUT_EXTENSION)
    ).lstrip(".")

    assets_raw = payload.get("assets") or {}
    assets = AssetsConfig(
        source=_as_str_tuple(assets_raw.get("source"), field="assets.source"),
        destination=str(assets_raw.get("destination", DEFAULT_ASSETS_DESTINATION)),
    )

    return TemplateConfig(
        source=payload.get("source"),
        destination=destination,
        extension=extension or DEFAULT_OUTPUT_EXTENSION,
        filetypes=_normalize_extensions(payload.get("filetypes")),
        omit=_as_str_tuple(payload.get("omit"), field="omit"),
        skip=_as_str_tuple(payload.get("skip"), field="skip"),
        assets=assets,
        plaintext=payload.get("plaintext"),
    )


def _build_css_config(payload: cabc.Mapping[str, typ.Any]) -> CssConfig:
    sources = _as_str_tuple(payload.get("source"), field="build.css.source")
    style = payload.get("pygments_style")
    return CssConfig(
        source=[Path(item) for item in sources],
        pygments_style=str(style) if style else None,
        minify=bool(payload.get("minify", False)),
    )


def _build_event_hooks(payload: cabc.Mapping[str, typ.Any]) -> EventHooks:
    """Pick callables out of ``events``, accepting camelCase or snake_case keys."""
    hooks = EventHooks()
    for attr, keys in _HOOK_ALIASES.items():
        for key in keys:
            candidate = payload.get(key)
            if callable(candidate):
                setattr(hooks, attr, candidate)
                break
    return hooks


__all__ = ["build_config_from_mapping", "load_build_config", "load_config_mapping"]
