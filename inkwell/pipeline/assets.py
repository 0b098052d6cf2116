"""Copy static asset trees into a template entry's output directory."""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from inkwell.config import AssetsConfig

logger = logging.getLogger(__name__)


def sync_assets(assets: AssetsConfig, output_dir: Path) -> list[Path]:
    """Copy each existing asset source into ``output_dir / assets.destination``.

    Directory sources are merged into the target tree; file sources are copied
    into it under their own name. Sources that do not exist are skipped
    without attempting a copy, and copy failures are logged rather than
    raised, so asset staging never aborts a build.

    Parameters
    ----------
    assets : AssetsConfig
        Asset sources and the destination folder relative to ``output_dir``.
    output_dir : Path
        The template entry's output directory.

    Returns
    -------
    list[Path]
        Source paths that were copied successfully.
    """
    target = output_dir / assets.destination
    copied: list[Path] = []
    for source in assets.source:
        if not source:
            continue
        path = Path(source)
        if not path.exists():
            logger.debug("Asset source %s does not exist; skipping", path)
            continue
        try:
            if path.is_dir():
                shutil.copytree(path, target, dirs_exist_ok=True)
            else:
                target.mkdir(parents=True, exist_ok=True)
                shutil.copy2(path, target / path.name)
        except OSError as exc:
            logger.warning("Could not copy assets from %s to %s: %s", path, target, exc)
            continue
        copied.append(path)
    if copied:
        logger.info("Copied %d asset source(s) into %s", len(copied), target)
    return copied


__all__ = ["sync_assets"]
