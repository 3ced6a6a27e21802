"""Unit tests for sidebar composition.

The explicit strategy mirrors a configured tree and fills labels from
documents; the inferred strategy groups documents by slug segments and then
applies label and ordering overrides. Both share the same label precedence:
configured label, then document title, then a filename-derived title.

Usage
-----
Run ``pytest tests/test_sidebar.py -v``.
"""

from __future__ import annotations

import typing as typ

import pytest

from docnav.config import SidebarOverrides, SidebarTree, SidebarTreeItem
from docnav.models import DocNode, GroupNode
from docnav.sidebar import (
    ExplicitTreeStrategy,
    InferredTreeStrategy,
    build_sidebar,
    iter_nodes,
    strategy_for,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docnav.models import DocumentRecord

    DocumentFactory = cabc.Callable[..., DocumentRecord]


def _paths(nodes: list) -> list[str]:
    return [node.path for node in nodes]


class TestExplicitTree:
    """Strategy A: the configured tree is the output shape."""

    def test_shape_and_label_precedence(
        self, make_document: DocumentFactory, log_messages: list[str]
    ) -> None:
        documents = [
            make_document("guide/intro", "Introduction"),
            make_document("guide/getting-started", "Quick Start"),
            make_document("guide/architecture/overview", "Overview"),
            make_document("unlisted/page", "Hidden"),
        ]
        tree = SidebarTree(
            items=(
                SidebarTreeItem(
                    path="guide",
                    label="Guide",
                    children=(
                        SidebarTreeItem(path="guide/intro", label="Intro"),
                        SidebarTreeItem(path="guide/getting-started"),
                        SidebarTreeItem(
                            path="guide/architecture",
                            children=(
                                SidebarTreeItem(path="guide/architecture/overview"),
                                SidebarTreeItem(path="guide/architecture/missing-page"),
                            ),
                        ),
                    ),
                ),
            )
        )
        sidebar = build_sidebar(documents, tree)

        assert len(sidebar) == 1
        guide = sidebar[0]
        assert isinstance(guide, GroupNode)
        assert guide.label == "Guide"
        intro, start, architecture = guide.children
        assert intro == DocNode(path="guide/intro", label="Intro", slug="guide/intro")
        assert start.label == "Quick Start", "document title fills a missing label"
        assert isinstance(architecture, GroupNode)
        assert architecture.label == "Architecture"
        overview, missing = architecture.children
        assert overview.label == "Overview"
        assert missing.label == "Missing Page"
        assert missing.slug == "guide/architecture/missing-page"
        assert "Hidden" not in [node.label for node in iter_nodes(sidebar)]
        assert any("guide/architecture/missing-page" in msg for msg in log_messages)

    def test_declared_empty_children_produce_empty_group(self) -> None:
        tree = SidebarTree(items=(SidebarTreeItem(path="drafts", children=()),))
        (node,) = ExplicitTreeStrategy(tree).build([])
        assert isinstance(node, GroupNode)
        assert node.children == []
        assert node.label == "Drafts"

    def test_group_links_landing_document(self, make_document: DocumentFactory) -> None:
        tree = SidebarTree(
            items=(
                SidebarTreeItem(
                    path="api", children=(SidebarTreeItem(path="api/reference"),)
                ),
            )
        )
        (group,) = build_sidebar(
            [make_document("api", "API Home"), make_document("api/reference")], tree
        )
        assert group.label == "API Home"
        assert group.slug == "api"


class TestInferredTree:
    """Strategy B: groups come from slug segments, overrides adjust them."""

    def test_groups_documents_by_first_segment(self, make_document: DocumentFactory) -> None:
        documents = [make_document("guide/start", "Start"), make_document("guide/intro", "Intro")]
        sidebar = build_sidebar(documents, SidebarOverrides())
        assert len(sidebar) == 1
        group = sidebar[0]
        assert isinstance(group, GroupNode)
        assert group.path == "guide"
        assert group.label == "Guide"
        assert [child.label for child in group.children] == ["Intro", "Start"]
        assert all(isinstance(child, DocNode) for child in group.children)

    def test_order_list_overrides_label_sort(self, make_document: DocumentFactory) -> None:
        documents = [make_document("guide/intro", "Intro"), make_document("guide/start", "Start")]
        overrides = SidebarOverrides(order=("guide/start", "guide/intro"))
        (group,) = build_sidebar(documents, overrides)
        assert _paths(group.children) == ["guide/start", "guide/intro"]

    def test_children_order_wins_and_unlisted_follow(self, make_document: DocumentFactory) -> None:
        documents = [
            make_document("guide/alpha", "Alpha"),
            make_document("guide/beta", "Beta"),
            make_document("guide/gamma", "Gamma"),
            make_document("guide/delta", "Delta"),
        ]
        overrides = SidebarOverrides(
            order=("guide/alpha",),
            children_order={"guide": ("guide/gamma", "guide/unknown", "guide/beta")},
        )
        (group,) = build_sidebar(documents, overrides)
        assert _paths(group.children) == [
            "guide/gamma",
            "guide/beta",
            "guide/alpha",
            "guide/delta",
        ], "listed children first, the rest in insertion order"

    def test_top_level_order_and_labels(self, make_document: DocumentFactory) -> None:
        documents = [
            make_document("api/reference", "Reference"),
            make_document("examples/custom", "Custom"),
            make_document("guide/intro", "Intro"),
        ]
        overrides = SidebarOverrides(
            labels={"guide": "User Guide", "api/reference": "API Reference"},
            order=("guide", "examples"),
        )
        sidebar = build_sidebar(documents, overrides)
        assert _paths(sidebar) == ["guide", "examples", "api"]
        assert sidebar[0].label == "User Guide"
        assert sidebar[2].children[0].label == "API Reference"

    def test_label_sort_ignores_case(self, make_document: DocumentFactory) -> None:
        documents = [
            make_document("docs/b", "beta"),
            make_document("docs/c", "Charlie"),
            make_document("docs/a", "alpha"),
        ]
        (group,) = build_sidebar(documents, SidebarOverrides())
        assert [child.label for child in group.children] == ["alpha", "beta", "Charlie"]

    def test_intermediate_groups_and_unique_paths(self, make_document: DocumentFactory) -> None:
        documents = [
            make_document("guide/architecture/patterns/state-management"),
            make_document("guide/architecture/overview"),
            make_document("readme", "Read Me"),
        ]
        sidebar = build_sidebar(documents, SidebarOverrides())
        paths = [node.path for node in iter_nodes(sidebar)]
        assert len(paths) == len(set(paths)), "paths must be unique"
        guide = next(node for node in sidebar if node.path == "guide")
        (architecture,) = guide.children
        assert architecture.label == "Architecture"
        assert _paths(architecture.children) == [
            "guide/architecture/overview",
            "guide/architecture/patterns",
        ]
        patterns = architecture.children[1]
        assert patterns.label == "Patterns"
        for node in iter_nodes(sidebar):
            if isinstance(node, GroupNode):
                assert all(child.path.startswith(f"{node.path}/") for child in node.children)

    @pytest.mark.parametrize(
        "slugs", [("guide", "guide/intro"), ("guide/intro", "guide")]
    )
    def test_document_at_group_path_becomes_landing_page(
        self, make_document: DocumentFactory, slugs: tuple[str, str]
    ) -> None:
        titles = {"guide": "Guide Home", "guide/intro": "Intro"}
        documents = [make_document(slug, titles[slug]) for slug in slugs]
        sidebar = InferredTreeStrategy().build(documents)
        assert len(sidebar) == 1
        group = sidebar[0]
        assert isinstance(group, GroupNode)
        assert group.slug == "guide"
        assert group.label == "Guide Home"
        assert _paths(group.children) == ["guide/intro"]

    def test_override_label_beats_document_title(self, make_document: DocumentFactory) -> None:
        documents = [make_document("guide/intro", "Front Matter Title")]
        overrides = SidebarOverrides(labels={"guide/intro": "Override"})
        (group,) = build_sidebar(documents, overrides)
        assert group.children[0].label == "Override"

    def test_empty_collection_has_no_groups(self) -> None:
        assert build_sidebar([], SidebarOverrides()) == []


def test_strategy_for_dispatches_on_config_shape() -> None:
    assert isinstance(strategy_for(SidebarTree()), ExplicitTreeStrategy)
    assert isinstance(strategy_for(SidebarOverrides()), InferredTreeStrategy)
    with pytest.raises(TypeError):
        strategy_for({"labels": {}})  # type: ignore[arg-type]
