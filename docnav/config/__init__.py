"""Load and validate docnav configuration YAML.

This subpackage parses the project's ``docnav.yaml`` file and produces frozen
dataclasses (:class:`SiteConfig`, :class:`SidebarTree`,
:class:`SidebarOverrides`) that the loader and sidebar composer consume. The
shape of the ``sidebar`` section selects the sidebar strategy: a list (or a
mapping with a ``tree`` key) declares an explicit tree, any other mapping
declares label and ordering overrides for a slug-inferred tree.

Examples
--------
>>> from pathlib import Path
>>> from docnav.config import load_site_config
>>> site = load_site_config(Path("docnav.yaml"))  # doctest: +SKIP
>>> type(site.sidebar).__name__  # doctest: +SKIP
'SidebarOverrides'
"""

from .loader import load_site_config
from .models import (
    SidebarConfig,
    SidebarOverrides,
    SidebarTree,
    SidebarTreeItem,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "SidebarConfig",
    "SidebarOverrides",
    "SidebarTree",
    "SidebarTreeItem",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
