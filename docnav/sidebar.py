r"""Compose the documentation sidebar from a loaded document collection.

Two interchangeable strategies build the same node types:

* :class:`ExplicitTreeStrategy` mirrors a declared :class:`SidebarTree`
  one-to-one, filling in labels from documents.
* :class:`InferredTreeStrategy` derives groups from slug segments and then
  applies :class:`SidebarOverrides` for labels and ordering.

:func:`build_sidebar` picks the strategy from the configuration shape.

Example
-------
>>> from docnav.config import SidebarOverrides
>>> from docnav.models import DocumentRecord
>>> docs = [
...     DocumentRecord("guide/start", "guide", "Start", "", "", 1, 1),
...     DocumentRecord("guide/intro", "guide", "Intro", "", "", 1, 1),
... ]
>>> [node.label for node in build_sidebar(docs, SidebarOverrides())[0].children]
['Intro', 'Start']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from loguru import logger

from .collation import collation_key
from .config.models import SidebarOverrides, SidebarTree, SidebarTreeItem
from .markdown_parser import derive_title
from .models import DocNode, GroupNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import SidebarConfig
    from .models import DocumentRecord, SidebarNode


class SidebarStrategy(typ.Protocol):
    """Build sidebar nodes for a sorted document collection."""

    def build(self, documents: cabc.Sequence[DocumentRecord]) -> list[SidebarNode]:
        """Return the top-level sidebar nodes."""
        ...


def _fallback_label(path: str) -> str:
    """Derive a label from the final segment of ``path``."""
    return derive_title(path.rsplit("/", 1)[-1])


class ExplicitTreeStrategy:
    """Expand a declared sidebar tree, cross-referencing document titles."""

    def __init__(self, tree: SidebarTree) -> None:
        self.tree = tree

    def build(self, documents: cabc.Sequence[DocumentRecord]) -> list[SidebarNode]:
        """Return nodes mirroring the configured tree exactly."""
        by_slug = {document.slug: document for document in documents}
        return [self._build_node(item, by_slug) for item in self.tree.items]

    def _build_node(
        self, item: SidebarTreeItem, by_slug: dict[str, DocumentRecord]
    ) -> SidebarNode:
        document = by_slug.get(item.path)
        label = item.label or (document.title if document else None)
        if item.children is not None:
            return GroupNode(
                path=item.path,
                label=label or _fallback_label(item.path),
                children=[self._build_node(child, by_slug) for child in item.children],
                slug=document.slug if document else None,
            )
        if document is None:
            logger.warning("Sidebar entry '{}' has no matching document", item.path)
        return DocNode(
            path=item.path, label=label or _fallback_label(item.path), slug=item.path
        )


@dc.dataclass(slots=True)
class _GroupDraft:
    """Mutable group used while slugs are folded into the tree."""

    path: str
    title: str | None = None
    slug: str | None = None
    children: dict[str, _GroupDraft | DocNode] = dc.field(default_factory=dict)


class InferredTreeStrategy:
    """Infer groups from slug segments, then apply label and order overrides."""

    def __init__(self, overrides: SidebarOverrides | None = None) -> None:
        self.overrides = overrides or SidebarOverrides()

    def build(self, documents: cabc.Sequence[DocumentRecord]) -> list[SidebarNode]:
        """Return the inferred, override-adjusted, recursively ordered tree."""
        root = _GroupDraft(path="")
        for document in documents:
            self._insert(root, document)
        return self._finalize(root)

    @staticmethod
    def _insert(root: _GroupDraft, document: DocumentRecord) -> None:
        segments = document.slug.split("/")
        parent = root
        for depth in range(1, len(segments)):
            path = "/".join(segments[:depth])
            node = parent.children.get(path)
            if isinstance(node, DocNode):
                # A document already sits where a directory is needed.
                node = _GroupDraft(path=path, title=node.label, slug=node.slug)
                parent.children[path] = node
            elif node is None:
                node = _GroupDraft(path=path)
                parent.children[path] = node
            parent = node

        existing = parent.children.get(document.slug)
        if isinstance(existing, _GroupDraft):
            existing.title = document.title
            existing.slug = document.slug
        else:
            parent.children[document.slug] = DocNode(
                path=document.slug, label=document.title, slug=document.slug
            )

    def _finalize(self, draft: _GroupDraft) -> list[SidebarNode]:
        labels = self.overrides.labels
        nodes: list[SidebarNode] = []
        for child in draft.children.values():
            if isinstance(child, DocNode):
                nodes.append(
                    DocNode(
                        path=child.path,
                        label=labels.get(child.path) or child.label,
                        slug=child.slug,
                    )
                )
                continue
            children = self._finalize(child)
            if not children:
                continue
            nodes.append(
                GroupNode(
                    path=child.path,
                    label=labels.get(child.path)
                    or child.title
                    or _fallback_label(child.path),
                    children=children,
                    slug=child.slug,
                )
            )
        return self._order(draft.path, nodes)

    def _order(self, group_path: str, nodes: list[SidebarNode]) -> list[SidebarNode]:
        """Apply explicit ordering, falling back to a label sort."""
        explicit: tuple[str, ...] | None = None
        if group_path:
            explicit = self.overrides.children_order.get(group_path)
        if explicit is None:
            child_paths = {node.path for node in nodes}
            explicit = tuple(path for path in self.overrides.order if path in child_paths)
        if not explicit:
            return sorted(nodes, key=lambda node: collation_key(node.label))

        by_path = {node.path: node for node in nodes}
        ordered: list[SidebarNode] = []
        for path in explicit:
            node = by_path.pop(path, None)
            if node is not None:
                ordered.append(node)
        ordered.extend(node for node in nodes if node.path in by_path)
        return ordered


def strategy_for(config: SidebarConfig) -> SidebarStrategy:
    """Return the strategy implementing ``config``'s sidebar shape."""
    match config:
        case SidebarTree():
            return ExplicitTreeStrategy(config)
        case SidebarOverrides():
            return InferredTreeStrategy(config)
        case _:
            msg = f"Unsupported sidebar configuration: {type(config).__name__}"
            raise TypeError(msg)


def build_sidebar(
    documents: cabc.Sequence[DocumentRecord], config: SidebarConfig
) -> list[SidebarNode]:
    """Build the sidebar for ``documents`` with the configured strategy."""
    return strategy_for(config).build(documents)


def iter_nodes(nodes: cabc.Iterable[SidebarNode]) -> cabc.Iterator[SidebarNode]:
    """Yield every node depth-first, parents before children."""
    for node in nodes:
        yield node
        if isinstance(node, GroupNode):
            yield from iter_nodes(node.children)


__all__ = [
    "ExplicitTreeStrategy",
    "InferredTreeStrategy",
    "SidebarStrategy",
    "build_sidebar",
    "iter_nodes",
    "strategy_for",
]
