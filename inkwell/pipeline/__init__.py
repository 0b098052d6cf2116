"""Compile pipeline: source resolution, per-file rendering, assets, manifest."""

from .assets import sync_assets
from .compiler import TemplateCompiler, compile_templates
from .models import BuildManifest, FileOutcome
from .sources import apply_skip, discover_templates, resolve_source_roots

__all__ = [
    "BuildManifest",
    "FileOutcome",
    "TemplateCompiler",
    "apply_skip",
    "compile_templates",
    "discover_templates",
    "resolve_source_roots",
    "sync_assets",
]
