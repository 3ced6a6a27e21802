"""Shared dataclasses produced by the document loader and sidebar composer."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(slots=True)
class DocumentRecord:
    """A rendered document and its derived metadata.

    Attributes
    ----------
    slug : str
        Path-derived identifier (no extension, ``/`` separated), unique
        within a loaded collection.
    section : str
        First segment of ``slug``.
    title : str
        Front-matter title, else first heading, else filename-derived title.
    raw_body : str
        Markdown following the front-matter block.
    html : str
        Rendered HTML fragment.
    word_count : int
        Words counted by :func:`docnav.metrics.count_words`.
    reading_time : int
        Estimated minutes to read; at least one.
    last_updated : str | None
        ``lastUpdated`` front-matter value when present.
    """

    slug: str
    section: str
    title: str
    raw_body: str
    html: str
    word_count: int
    reading_time: int
    last_updated: str | None = None


@dc.dataclass(slots=True)
class DocNode:
    """Sidebar leaf linking to exactly one document."""

    path: str
    label: str
    slug: str
    type: typ.Literal["doc"] = dc.field(default="doc", init=False)


@dc.dataclass(slots=True)
class GroupNode:
    """Sidebar branch holding child nodes.

    ``slug`` is set when a document lives at the group's own path and acts
    as its landing page.
    """

    path: str
    label: str
    children: list[SidebarNode] = dc.field(default_factory=list)
    slug: str | None = None
    type: typ.Literal["group"] = dc.field(default="group", init=False)


SidebarNode = DocNode | GroupNode


@dc.dataclass(slots=True)
class DocumentBundle:
    """The cached result of a full load: documents plus their sidebar."""

    documents: list[DocumentRecord]
    sidebar: list[SidebarNode]

    def get(self, slug: str) -> DocumentRecord | None:
        """Return the document with ``slug`` or None."""
        for document in self.documents:
            if document.slug == slug:
                return document
        return None


__all__ = [
    "DocNode",
    "DocumentBundle",
    "DocumentRecord",
    "GroupNode",
    "SidebarNode",
]
