"""Load and validate build configuration for inkwell template builds.

This subpackage reads the project's ``config.yaml`` (plus ``config.<env>.yaml``
for non-local environments), deep-merges the layers, and produces strongly
typed dataclasses (:class:`BuildConfig`, :class:`TemplateConfig`, etc.) that
the compile pipeline consumes. The primary entry point is
:func:`load_build_config`; callers that assemble configuration in Python use
:func:`build_config_from_mapping` instead.

Examples
--------
>>> from pathlib import Path
>>> from inkwell.config import load_build_config
>>> config = load_build_config("production", Path("."))  # doctest: +SKIP
>>> config.templates[0].destination  # doctest: +SKIP
PosixPath('build_production')
"""

from .helpers import lookup, merge_config
from .loader import build_config_from_mapping, load_build_config, load_config_mapping
from .models import (
    AssetsConfig,
    BuildConfig,
    BuildConfigError,
    ConfigTypeError,
    CssConfig,
    EventHooks,
    FailPolicy,
    MissingTemplatesError,
    TemplateConfig,
)

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
    "build_config_from_mapping",
    "load_build_config",
    "load_config_mapping",
    "lookup",
    "merge_config",
]
