"""Utility helpers shared by the docnav configuration loader."""

from __future__ import annotations

import typing as typ

from .models import (
    SidebarConfig,
    SidebarOverrides,
    SidebarTree,
    SidebarTreeItem,
    SiteConfigError,
)

CHILDREN_ORDER_KEYS = ("children_order", "childrenOrder")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: object, *, field: str) -> tuple[str, ...]:
    """Normalize a YAML sequence of paths into a tuple of strings."""
    match value:
        case None:
            return ()
        case list() | tuple():
            return tuple(str(entry).strip() for entry in value if entry is not None)
        case _:
            msg = f"Sidebar '{field}' must be a list of paths."
            raise SiteConfigError(msg)


def _build_tree_item(payload: object, *, trail: str) -> SidebarTreeItem:
    """Build one explicit sidebar item, recursing into its children."""
    match payload:
        case str():
            path = payload.strip()
            label = None
            children_raw = None
        case dict():
            path = _optional_str(payload.get("path")) or ""
            label = _optional_str(payload.get("label"))
            children_raw = payload.get("children")
        case _:
            msg = f"Sidebar entry at {trail} must be a mapping or a path string."
            raise SiteConfigError(msg)
    if not path:
        msg = f"Sidebar entry at {trail} is missing 'path'."
        raise SiteConfigError(msg)

    children: tuple[SidebarTreeItem, ...] | None = None
    if children_raw is not None:
        if not isinstance(children_raw, list):
            msg = f"Sidebar entry '{path}' has non-list 'children'."
            raise SiteConfigError(msg)
        children = tuple(
            _build_tree_item(child, trail=f"{trail}.children[{index}]")
            for index, child in enumerate(children_raw)
        )
    return SidebarTreeItem(path=path, label=label, children=children)


def _build_sidebar_tree(items: list[object]) -> SidebarTree:
    return SidebarTree(
        items=tuple(
            _build_tree_item(item, trail=f"sidebar[{index}]")
            for index, item in enumerate(items)
        )
    )


def _build_overrides(payload: typ.Mapping[str, typ.Any]) -> SidebarOverrides:
    """Build Strategy B overrides from the ``sidebar`` mapping."""
    labels_raw = payload.get("labels") or {}
    if not isinstance(labels_raw, dict):
        msg = "Sidebar 'labels' must map paths to labels."
        raise SiteConfigError(msg)
    labels = {str(path): str(label) for path, label in labels_raw.items()}

    children_order_raw: typ.Any = {}
    for key in CHILDREN_ORDER_KEYS:
        if payload.get(key):
            children_order_raw = payload[key]
            break
    if not isinstance(children_order_raw, dict):
        msg = "Sidebar 'children_order' must map group paths to lists."
        raise SiteConfigError(msg)
    children_order = {
        str(path): _string_list(entries, field=f"children_order.{path}")
        for path, entries in children_order_raw.items()
    }
    return SidebarOverrides(
        labels=labels,
        order=_string_list(payload.get("order"), field="order"),
        children_order=children_order,
    )


def _build_sidebar_config(payload: object) -> SidebarConfig:
    """Select the sidebar strategy config from the shape of ``payload``."""
    match payload:
        case None:
            return SidebarOverrides()
        case list():
            return _build_sidebar_tree(payload)
        case {"tree": list() as items}:
            return _build_sidebar_tree(items)
        case dict():
            return _build_overrides(payload)
        case _:
            msg = "The 'sidebar' section must be a list or a mapping."
            raise SiteConfigError(msg)


__all__ = [
    "CHILDREN_ORDER_KEYS",
    "_build_overrides",
    "_build_sidebar_config",
    "_build_tree_item",
    "_optional_str",
    "_string_list",
]
