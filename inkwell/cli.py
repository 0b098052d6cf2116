"""Cyclopts CLI entrypoint for building inkwell templates.

The ``inkwell`` console script defined here loads ``config.yaml`` (merged with
``config.<env>.yaml`` for other environments), compiles every configured
template entry, and reports how many templates were built. Options can also
be supplied through ``INKWELL_*`` environment variables, which is convenient
in CI.

Examples
--------
Build the local environment from the current directory:

>>> from inkwell.cli import main
>>> main()  # doctest: +SKIP

Build production output:

>>> from inkwell.cli import app
>>> app(["build", "--env", "production"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import time
import typing as typ

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_ENV
from .pipeline import compile_templates

logger = logging.getLogger(__name__)

app = App(name="inkwell", config=cyclopts.config.Env("INKWELL_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Compile templates into their configured output folders.")
def build(
    *,
    env: typ.Annotated[
        str, Parameter(help="Environment name", env_var="INKWELL_ENV")
    ] = DEFAULT_ENV,
    verbose: typ.Annotated[
        bool, Parameter(help="Log per-file progress", env_var="INKWELL_VERBOSE")
    ] = False,
) -> None:
    """Build every template entry for ``env`` and print a summary.

    Parameters
    ----------
    env : str, optional
        Environment name; ``local`` reads ``config.yaml`` only, other names
        also merge ``config.<env>.yaml``.
    verbose : bool, optional
        Enable DEBUG logging.

    Raises
    ------
    Exception
        Any fatal build error is logged and re-raised unchanged.
    """
    _configure_logging(verbose=verbose)
    start = time.perf_counter()
    try:
        manifest = compile_templates(env)
    except Exception:
        logger.exception("Build failed for env %s", env)
        raise
    elapsed = time.perf_counter() - start
    for name in manifest.compiled:
        print(f"compiled {name}")
    print(f"Built {len(manifest.parsed)} templates in {elapsed:.2f}s")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``inkwell`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
