"""Compile trees of templates into rendered HTML, plaintext, and assets.

This package exposes the build pipeline used by the ``inkwell`` console
script: configuration is read from ``config.yaml`` (plus
``config.<env>.yaml``), every configured template entry is rendered with
Jinja2, plaintext companions are derived where requested, and static assets
are copied next to the output.

Exports
-------
- ``compile_templates``: Run one build and return its :class:`BuildManifest`.
- ``load_build_config``: Load and parse configuration for an environment.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from inkwell import compile_templates
>>> manifest = compile_templates("local")  # doctest: +SKIP
>>> manifest.parsed  # doctest: +SKIP
['emails/confirm.html', 'emails/welcome.html']
"""

from __future__ import annotations

from .cli import app, main
from .config import BuildConfig, load_build_config
from .pipeline import BuildManifest, compile_templates

__all__ = [
    "BuildConfig",
    "BuildManifest",
    "app",
    "compile_templates",
    "load_build_config",
    "main",
]
