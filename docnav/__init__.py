"""Render Markdown documentation and compose its navigation sidebar.

This package turns a folder of Markdown documents into render-ready HTML
fragments (call-outs, line-numbered code blocks, footnotes, task lists,
math) and a deterministic sidebar tree, cached behind an explicit
:class:`DocumentCache`.

Exports
-------
- ``DocumentCache``: async loader and memo for ``{documents, sidebar}``.
- ``build_sidebar``: compose a sidebar for a document collection.
- ``app`` / ``main``: the ``docnav`` command line.

Examples
--------
>>> import asyncio
>>> from docnav import DocumentCache
>>> from docnav.config import SidebarOverrides
>>> from docnav.documents import MappingSource
>>> cache = DocumentCache(MappingSource({"api/reference.md": "Body"}), SidebarOverrides())
>>> asyncio.run(cache.load_all()).sidebar[0].label
'Api'
"""

from __future__ import annotations

from .cli import app, main
from .documents import DocumentCache
from .sidebar import build_sidebar

__all__ = ["DocumentCache", "app", "build_sidebar", "main"]
