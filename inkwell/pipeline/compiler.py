"""High-level orchestration for compiling template sources into output files.

This module drives one build: it compiles the shared stylesheet once, walks
every template entry and each of its source roots in declaration order,
renders each discovered file, derives plaintext companions before the HTML is
recorded, copies static assets, and accumulates a :class:`BuildManifest`.

Per-file failures are settled centrally by the build's fail policy: ``silent``
skips the file, ``verbose`` logs it and skips it, and anything else re-raises
the original error, aborting the build without a manifest. Configuration
errors (bad ``source`` shapes, missing templates) always propagate.

Example
-------
>>> from inkwell.pipeline import compile_templates
>>> manifest = compile_templates("local")  # doctest: +SKIP
>>> sorted(manifest.compiled)  # doctest: +SKIP
['confirm', 'welcome']
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import shutil
import typing as typ
from pathlib import Path

from inkwell._constants import DEFAULT_ENV, config_filename
from inkwell.config import (
    BuildConfig,
    FailPolicy,
    MissingTemplatesError,
    TemplateConfig,
    build_config_from_mapping,
    load_build_config,
    merge_config,
)
from inkwell.render import (
    CurrentFile,
    RenderContext,
    TemplateRenderer,
    compile_css,
    generate_plaintext,
)

from .assets import sync_assets
from .models import BuildManifest, FileOutcome
from .sources import (
    apply_skip,
    discover_templates,
    iter_visible_files,
    resolve_source_roots,
)

if typ.TYPE_CHECKING:
    from inkwell.render import PlaintextResult, RenderedTemplate

logger = logging.getLogger(__name__)


class TemplateCompiler:
    """Compile every template entry of a build configuration."""

    def __init__(
        self, config: BuildConfig, *, renderer: TemplateRenderer | None = None
    ) -> None:
        """Initialize the compiler for one build invocation.

        Parameters
        ----------
        config : BuildConfig
            Parsed configuration; shared read-only with hooks and templates.
        renderer : TemplateRenderer, optional
            Renderer used for every file. Defaults to a Jinja renderer searching
            ``config.components``.
        """
        self.config = config
        self.renderer = renderer or TemplateRenderer(config.components)
        self.manifest = BuildManifest()

    def run(self) -> BuildManifest:
        """Compile all template entries and return the accumulated manifest.

        Raises
        ------
        MissingTemplatesError
            If the configuration holds no template entry.
        ConfigTypeError
            If a template ``source`` does not resolve to strings.
        Exception
            The original per-file error when the fail policy is strict.
        """
        if not self.config.templates:
            msg = (
                "No template sources defined in `build.templates`, "
                f"check your {config_filename(self.config.env)} file"
            )
            raise MissingTemplatesError(msg)

        self.manifest.css = compile_css(self.config)
        page = {**self.config.data, "env": self.config.env}
        for template in self.config.templates:
            self._compile_entry(template, page)

        if self.config.hooks.after_build is not None:
            self.config.hooks.after_build(self.manifest.files, self.config)
        logger.info(
            "Compiled %d template(s) for env %s",
            len(self.manifest.parsed),
            self.config.env,
        )
        return self.manifest

    def _compile_entry(
        self, template: TemplateConfig, page: cabc.Mapping[str, typ.Any]
    ) -> None:
        """Rebuild one template entry's output directory from scratch."""
        shutil.rmtree(template.destination, ignore_errors=True)
        for source_root in resolve_source_roots(template.source, self.config):
            self._compile_source(template, source_root, page)

    def _compile_source(
        self,
        template: TemplateConfig,
        source_root: str,
        page: cabc.Mapping[str, typ.Any],
    ) -> None:
        candidates = discover_templates(source_root, template.filetypes)
        files = apply_skip(candidates, template.skip, template.destination)
        if not files:
            logger.warning(
                "No files with the .%s extension found in %s; skipping",
                "|".join(template.filetypes),
                source_root,
            )
            return

        if self.config.hooks.before_create is not None:
            self.config.hooks.before_create(self.config)

        for file in files:
            self._settle(self._render_file(template, source_root, file, page))

        sync_assets(template.assets, template.destination)
        if template.destination.is_dir():
            self.manifest.touch(
                path.as_posix()
                for path in iter_visible_files(template.destination, "*.*")
            )

    def _render_file(
        self,
        template: TemplateConfig,
        source_root: str,
        file: str,
        page: cabc.Mapping[str, typ.Any],
    ) -> FileOutcome:
        """Render, post-process, and write one file; capture any failure."""
        context = RenderContext(
            use_file_config=True,
            page=page,
            css=self.manifest.css,
            hooks=self.config.hooks,
            current=CurrentFile.from_path(file),
        )
        try:
            text = Path(file).read_text(encoding="utf-8")
            rendered = self.renderer.render(text, context)
            destination = str(rendered.config.get("permalink") or file)
            output_path = _output_path(template, source_root, file, rendered)

            setting = _plaintext_setting(template, rendered)
            plaintext = None
            if isinstance(setting, cabc.Mapping) or setting:
                plaintext = _plaintext_for(rendered.html, setting, file, output_path)
                rendered.html = plaintext.html

            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered.html, encoding="utf-8")
            if plaintext is not None:
                _write_plaintext(plaintext, file)
        except Exception as exc:  # noqa: BLE001 - settled by the fail policy
            return FileOutcome(file=file, error=exc)
        return FileOutcome(
            file=file,
            rendered=rendered,
            destination=destination,
            output_path=output_path,
        )

    def _settle(self, outcome: FileOutcome) -> None:
        """Record a rendered file or apply the fail policy to its error."""
        if outcome.ok:
            rendered = typ.cast("RenderedTemplate", outcome.rendered)
            name = Path(outcome.destination or outcome.file).stem
            self.manifest.record(name, rendered.html, outcome.file)
            logger.debug("Rendered %s to %s", outcome.file, outcome.output_path)
            return

        match self.config.fail:
            case FailPolicy.SILENT:
                return
            case FailPolicy.VERBOSE:
                logger.error(
                    "Failed to render %s", outcome.file, exc_info=outcome.error
                )
            case _:
                raise outcome.error


def _plaintext_for(
    html: str, setting: object, file: str, output_path: Path
) -> PlaintextResult:
    """Return the plaintext companion and marker-free HTML for one file."""
    base = setting if isinstance(setting, cabc.Mapping) else {}
    options = merge_config(base, {"filepath": file})
    return generate_plaintext(html, output_path, options)


def _write_plaintext(result: PlaintextResult, file: str) -> None:
    result.destination.parent.mkdir(parents=True, exist_ok=True)
    result.destination.write_text(result.plaintext, encoding="utf-8")
    logger.debug("Wrote plaintext for %s to %s", file, result.destination)


def _plaintext_setting(template: TemplateConfig, rendered: RenderedTemplate) -> object:
    """Return the entry's plaintext setting, else the file's, else False."""
    if template.plaintext is not None:
        return template.plaintext
    return rendered.config.get("plaintext", False)


def _output_path(
    template: TemplateConfig, source_root: str, file: str, rendered: RenderedTemplate
) -> Path:
    """Return where the rendered HTML for ``file`` is written.

    A ``permalink`` is used verbatim. Otherwise the file's path relative to
    its source root is placed under the entry's destination with the output
    extension.
    """
    permalink = rendered.config.get("permalink")
    if permalink:
        return Path(str(permalink))
    root = Path(source_root)
    path = Path(file)
    relative = Path(path.name) if root.is_file() else path.relative_to(root)
    return template.destination / relative.with_suffix(f".{template.extension}")


def compile_templates(
    env: str = DEFAULT_ENV,
    config: BuildConfig | cabc.Mapping[str, typ.Any] | None = None,
    *,
    root: Path | None = None,
    renderer: TemplateRenderer | None = None,
) -> BuildManifest:
    """Compile every configured template and return the build manifest.

    Parameters
    ----------
    env : str, optional
        Environment name; selects ``config.<env>.yaml`` when loading config and
        is exposed to templates as ``env``.
    config : BuildConfig or Mapping, optional
        Configuration to build with. ``None`` or an empty mapping loads it from
        the config files in ``root``.
    root : Path, optional
        Directory holding the config files; defaults to the working directory.
    renderer : TemplateRenderer, optional
        Renderer override, mainly for tests.

    Returns
    -------
    BuildManifest
        Compiled HTML by name, touched files, parsed sources, and the CSS.
    """
    match config:
        case BuildConfig():
            build_config = config
        case cabc.Mapping() if config:
            build_config = build_config_from_mapping(config, env)
        case _:
            build_config = load_build_config(env, root)
    return TemplateCompiler(build_config, renderer=renderer).run()


__all__ = ["TemplateCompiler", "compile_templates"]
