"""Load docnav configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docnav._constants import DEFAULT_SOURCE_PATTERN

from .helpers import _build_sidebar_config, _optional_str
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing docs sources and the sidebar.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docnav.yaml``). Relative paths inside the file resolve against the
        file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with the sidebar strategy config selected from
        the shape of the ``sidebar`` section.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure is not a mapping or a section is
        malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docnav.config import load_site_config
    >>> config = load_site_config(Path("docnav.yaml"))  # doctest: +SKIP
    >>> config.docs_dir.name  # doctest: +SKIP
    'docs'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    return SiteConfig(
        docs_dir=_resolve_path(base_dir, raw.get("docs_dir"), "docs"),
        sidebar=_build_sidebar_config(raw.get("sidebar")),
        pattern=_optional_str(raw.get("pattern")) or DEFAULT_SOURCE_PATTERN,
        output=_resolve_path(base_dir, raw.get("output"), "public/docs.json"),
        html_output_dir=_resolve_path(
            base_dir, raw.get("html_output_dir"), "public/docs"
        ),
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
        callout_locale=_optional_str(raw.get("callout_locale")) or "en",
        site_name=_optional_str(raw.get("site_name")) or "Documentation",
    )


def _resolve_path(base_dir: Path, value: object | None, default: str) -> Path:
    """Return ``value`` (or ``default``) as a path anchored at ``base_dir``."""
    candidate = Path(_optional_str(value) or default)
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


__all__ = ["load_site_config"]
