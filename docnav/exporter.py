"""Write loaded documentation bundles to disk.

Two artefacts are supported: a JSON bundle (``{"documents": [...],
"sidebar": [...]}``) for client-side browsers, and a directory of static HTML
pages rendered through the ``doc_page.jinja`` template with the sidebar
embedded in every page.

Example
-------
>>> from pathlib import Path
>>> from docnav.exporter import write_bundle
>>> write_bundle(bundle, Path("public/docs.json"))  # doctest: +SKIP
PosixPath('public/docs.json')
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from loguru import logger

if typ.TYPE_CHECKING:
    from .models import DocumentBundle
    from .rendering import HtmlContentRenderer


def encode_bundle(bundle: DocumentBundle) -> str:
    """Serialise ``bundle`` to a JSON document."""
    return json.dumps(dc.asdict(bundle), ensure_ascii=False)


def write_bundle(bundle: DocumentBundle, path: Path) -> Path:
    """Write the JSON bundle to ``path``, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode_bundle(bundle), encoding="utf-8")
    logger.debug("Wrote bundle with {} documents", len(bundle.documents))
    return path


class StaticPageExporter:
    """Render each document into a standalone HTML page."""

    def __init__(
        self,
        renderer: HtmlContentRenderer,
        *,
        site_name: str = "Documentation",
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the exporter.

        Parameters
        ----------
        renderer : HtmlContentRenderer
            Renderer whose stylesheet is embedded for highlighted code.
        site_name : str, optional
            Title suffix for every page.
        templates_dir : Path, optional
            Directory containing ``doc_page.jinja``; defaults to the package
            templates.
        """
        self.renderer = renderer
        self.site_name = site_name
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def run(self, bundle: DocumentBundle, output_dir: Path) -> list[Path]:
        """Write one page per document and return the written paths.

        Pages are written to ``<output_dir>/<slug>.html``; links between pages
        are relative so the output can be served from any prefix.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        stylesheet = self.renderer.stylesheet
        written: list[Path] = []
        for document in bundle.documents:
            depth = document.slug.count("/")
            html = self.template.render(
                document=document,
                sidebar=bundle.sidebar,
                site_name=self.site_name,
                root_prefix="../" * depth,
                pygments_css=stylesheet,
            )
            output_path = output_dir / f"{document.slug}.html"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)
        return written


__all__ = ["StaticPageExporter", "encode_bundle", "write_bundle"]
