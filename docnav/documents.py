"""Discover, render, and cache the documentation collection.

:class:`DocumentCache` is the single entry point callers hold on to. Its
:meth:`~DocumentCache.load_all` coroutine reads every source exposed by a
:class:`DocumentSource`, parses front matter, renders HTML, computes reading
metrics, and composes the sidebar. The resulting :class:`DocumentBundle` is
memoised until :meth:`~DocumentCache.reset` is called.

Example
-------
>>> import asyncio
>>> from docnav.config import SidebarOverrides
>>> from docnav.documents import DocumentCache, MappingSource
>>> cache = DocumentCache(MappingSource({"guide/intro.md": "# Hello"}), SidebarOverrides())
>>> bundle = asyncio.run(cache.load_all())
>>> bundle.documents[0].title
'Hello'
"""

from __future__ import annotations

import asyncio
import re
import typing as typ
from pathlib import Path, PurePosixPath

from loguru import logger

from ._constants import (
    DEFAULT_SOURCE_PATTERN,
    LAST_UPDATED_KEYS,
    MARKDOWN_SUFFIX,
    TITLE_KEY,
)
from .collation import collation_key
from .markdown_parser import (
    derive_title,
    extract_title,
    normalize_source,
    parse_front_matter,
)
from .metrics import count_words, reading_time
from .models import DocumentBundle, DocumentRecord
from .rendering import HtmlContentRenderer
from .sidebar import build_sidebar

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import SidebarConfig

MARKDOWN_SUFFIX_PATTERN = re.compile(re.escape(MARKDOWN_SUFFIX) + "$", re.IGNORECASE)


class DocumentSource(typ.Protocol):
    """Async collaborator that lists and reads raw document sources."""

    async def discover(self) -> list[str]:
        """Return source paths relative to the docs root, in load order."""
        ...

    async def read(self, path: str) -> str:
        """Return the raw text stored at ``path``."""
        ...


class FileSystemSource:
    """Read Markdown files below a directory."""

    def __init__(self, root: Path, pattern: str = DEFAULT_SOURCE_PATTERN) -> None:
        self.root = root
        self.pattern = pattern

    async def discover(self) -> list[str]:
        """Return matching files as sorted POSIX paths relative to ``root``."""
        matches = await asyncio.to_thread(self._scan)
        return sorted(matches)

    def _scan(self) -> list[str]:
        return [
            path.relative_to(self.root).as_posix()
            for path in self.root.glob(self.pattern)
            if path.is_file()
        ]

    async def read(self, path: str) -> str:
        """Read ``path`` as UTF-8 in a worker thread."""
        return await asyncio.to_thread(
            (self.root / path).read_text, encoding="utf-8"
        )


class MappingSource:
    """Serve sources from an in-memory mapping of path to text."""

    def __init__(self, sources: cabc.Mapping[str, str]) -> None:
        self.sources = dict(sources)

    async def discover(self) -> list[str]:
        """Return the mapping keys in insertion order."""
        return list(self.sources)

    async def read(self, path: str) -> str:
        """Return the stored text; missing keys raise ``KeyError``."""
        return self.sources[path]


def slug_for_path(path: str) -> str:
    """Return the slug for a relative source path.

    >>> slug_for_path("guide\\\\Getting-Started.MD")
    'guide/Getting-Started'
    """
    normalized = path.replace("\\", "/").lstrip("/")
    return MARKDOWN_SUFFIX_PATTERN.sub("", normalized)


def build_document(
    path: str, source: str, renderer: HtmlContentRenderer
) -> DocumentRecord:
    """Turn one raw source into a rendered :class:`DocumentRecord`."""
    metadata, body = parse_front_matter(normalize_source(source))
    slug = slug_for_path(path)
    title = (
        metadata.get(TITLE_KEY)
        or extract_title(body)
        or derive_title(PurePosixPath(slug).name or slug)
    )
    last_updated = next(
        (metadata[key] for key in LAST_UPDATED_KEYS if metadata.get(key)), None
    )
    word_count = count_words(body)
    return DocumentRecord(
        slug=slug,
        section=slug.split("/", 1)[0],
        title=title,
        raw_body=body,
        html=renderer.markdown(body),
        word_count=word_count,
        reading_time=reading_time(word_count),
        last_updated=last_updated,
    )


class DocumentCache:
    """Process-wide memo of the rendered collection and its sidebar."""

    def __init__(
        self,
        source: DocumentSource,
        sidebar_config: SidebarConfig,
        *,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Initialize an empty cache.

        Parameters
        ----------
        source : DocumentSource
            Collaborator that discovers and reads raw documents.
        sidebar_config : SidebarConfig
            Static sidebar configuration; its shape selects the strategy.
        renderer : HtmlContentRenderer, optional
            Renderer used for every document. Defaults to a renderer with
            the default style and locale.
        """
        self.source = source
        self.sidebar_config = sidebar_config
        self.renderer = renderer or HtmlContentRenderer()
        self._bundle: DocumentBundle | None = None
        self._generation = 0
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def is_loaded(self) -> bool:
        """Return True when a bundle is cached."""
        return self._bundle is not None

    async def load_all(self) -> DocumentBundle:
        """Return the cached bundle, loading it on first access.

        Concurrent callers wait on the same load instead of starting their
        own. A failed read cancels the reads still running and propagates;
        the cache stays empty.

        Returns
        -------
        DocumentBundle
            The same object on every call until :meth:`reset` runs.
        """
        if self._bundle is not None:
            return self._bundle
        async with self._loop_lock():
            if self._bundle is not None:
                return self._bundle
            generation = self._generation
            bundle = await self._load()
            if generation == self._generation:
                self._bundle = bundle
            else:
                logger.debug("Cache reset during load; result not cached")
            return bundle

    def _loop_lock(self) -> asyncio.Lock:
        """Return the load lock for the running event loop."""
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def reset(self) -> None:
        """Drop the cached bundle so the next load re-reads every source."""
        self._bundle = None
        self._generation += 1

    async def _load(self) -> DocumentBundle:
        paths = await self.source.discover()
        logger.debug("Discovered {} document sources", len(paths))
        try:
            async with asyncio.TaskGroup() as group:
                reads = [group.create_task(self.source.read(path)) for path in paths]
        except ExceptionGroup as error:
            raise error.exceptions[0] from None
        texts = [read.result() for read in reads]

        by_slug: dict[str, DocumentRecord] = {}
        for path, text in zip(paths, texts, strict=True):
            document = build_document(path, text, self.renderer)
            if document.slug in by_slug:
                logger.warning(
                    "Slug '{}' from '{}' replaces an earlier source", document.slug, path
                )
            by_slug[document.slug] = document

        documents = sorted(
            by_slug.values(), key=lambda document: collation_key(document.slug)
        )
        sidebar = build_sidebar(documents, self.sidebar_config)
        return DocumentBundle(documents=documents, sidebar=sidebar)


__all__ = [
    "DocumentCache",
    "DocumentSource",
    "FileSystemSource",
    "MappingSource",
    "build_document",
    "slug_for_path",
]
