"""Cyclopts CLI entrypoint for building docnav bundles and pages.

The ``docnav`` console script defined here loads the Markdown sources named
in ``docnav.yaml``, renders them, composes the sidebar, and writes either a
JSON bundle for a client-side browser or a directory of static HTML pages.

Examples
--------
Build the JSON bundle for the default configuration:

>>> from docnav.cli import main
>>> main()  # doctest: +SKIP

Print the sidebar tree for a custom configuration file:

>>> from docnav.cli import app
>>> app(["sidebar", "--config", "site/docnav.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from loguru import logger

from .config import SiteConfig, load_site_config
from .documents import DocumentCache, FileSystemSource
from .exporter import StaticPageExporter, write_bundle
from .models import GroupNode
from .rendering import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import DocumentBundle, SidebarNode

DEFAULT_CONFIG = Path("docnav.yaml")

app = App(name="docnav", config=cyclopts.config.Env("DOCNAV_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to docnav config", env_var="DOCNAV_CONFIG")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log per-document progress")]


def _configure_logging(*, verbose: bool) -> None:
    """Send loguru output to stderr at INFO, or DEBUG when verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _build_renderer(site: SiteConfig) -> HtmlContentRenderer:
    return HtmlContentRenderer(site.pygments_style, callout_locale=site.callout_locale)


def _load_bundle(site: SiteConfig) -> DocumentBundle:
    """Load every document described by ``site`` in a fresh event loop."""
    cache = DocumentCache(
        FileSystemSource(site.docs_dir, site.pattern),
        site.sidebar,
        renderer=_build_renderer(site),
    )
    return asyncio.run(cache.load_all())


def format_tree(nodes: cabc.Sequence[SidebarNode], depth: int = 0) -> list[str]:
    """Return indented ``label (path)`` lines for a sidebar tree."""
    lines: list[str] = []
    indent = "  " * depth
    for node in nodes:
        if isinstance(node, GroupNode):
            lines.append(f"{indent}{node.label}/ ({node.path})")
            lines.extend(format_tree(node.children, depth + 1))
        else:
            lines.append(f"{indent}{node.label} ({node.slug})")
    return lines


@app.command(help="Render all documents and write the JSON bundle.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None, Parameter(help="Override the bundle path")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render the configured documents and write ``{documents, sidebar}``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docnav.yaml`` configuration file (overridable via
        ``DOCNAV_CONFIG``).
    output : Path or None, optional
        Destination for the JSON bundle; defaults to the configured output.
    verbose : bool, optional
        Enable debug logging.
    """
    _configure_logging(verbose=verbose)
    site = load_site_config(config)
    bundle = _load_bundle(site)
    path = write_bundle(bundle, output or site.output)
    print(f"wrote {_format_path(path)}")


@app.command(help="Print the composed sidebar tree.")
def sidebar(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Load the documents and print the sidebar as an indented tree."""
    _configure_logging(verbose=verbose)
    site = load_site_config(config)
    bundle = _load_bundle(site)
    for line in format_tree(bundle.sidebar):
        print(line)


@app.command(help="Export every document as a static HTML page.")
def export(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the HTML output folder")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render standalone pages with the sidebar embedded in each one."""
    _configure_logging(verbose=verbose)
    site = load_site_config(config)
    bundle = _load_bundle(site)
    exporter = StaticPageExporter(_build_renderer(site), site_name=site.site_name)
    for path in exporter.run(bundle, output_dir or site.html_output_dir):
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docnav`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
