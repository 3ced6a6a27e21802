"""Typed dataclasses describing docnav site and sidebar configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path
from types import MappingProxyType

from docnav._constants import DEFAULT_SOURCE_PATTERN


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class SidebarTreeItem:
    """One node of an explicit sidebar tree.

    Attributes
    ----------
    path : str
        Document slug (leaf) or group path.
    label : str | None
        Display label; resolved from documents when omitted.
    children : tuple[SidebarTreeItem, ...] | None
        Nested items. ``None`` marks a document link, any tuple (even an
        empty one) marks a group.
    """

    path: str
    label: str | None = None
    children: tuple[SidebarTreeItem, ...] | None = None


@dc.dataclass(frozen=True, slots=True)
class SidebarTree:
    """Explicit sidebar layout mirrored one-to-one in the output."""

    items: tuple[SidebarTreeItem, ...] = ()


def _frozen_mapping(value: typ.Mapping[str, typ.Any]) -> typ.Mapping[str, typ.Any]:
    return MappingProxyType(dict(value))


@dc.dataclass(frozen=True, slots=True)
class SidebarOverrides:
    """Label and ordering overrides applied to a slug-inferred sidebar.

    Attributes
    ----------
    labels : Mapping[str, str]
        Display labels keyed by node path.
    order : tuple[str, ...]
        Preferred ordering of paths; applies to the top level and to any
        group without its own ``children_order`` entry.
    children_order : Mapping[str, tuple[str, ...]]
        Ordering of direct children keyed by group path.
    """

    labels: typ.Mapping[str, str] = dc.field(default_factory=dict)
    order: tuple[str, ...] = ()
    children_order: typ.Mapping[str, tuple[str, ...]] = dc.field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        """Freeze the mapping fields so the config cannot drift after load."""
        object.__setattr__(self, "labels", _frozen_mapping(self.labels))
        object.__setattr__(self, "order", tuple(self.order))
        object.__setattr__(
            self,
            "children_order",
            _frozen_mapping(
                {key: tuple(value) for key, value in self.children_order.items()}
            ),
        )


SidebarConfig = SidebarTree | SidebarOverrides


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """A fully resolved docnav site definition sourced from YAML config."""

    docs_dir: Path
    sidebar: SidebarConfig = dc.field(default_factory=SidebarOverrides)
    pattern: str = DEFAULT_SOURCE_PATTERN
    output: Path = Path("public/docs.json")
    html_output_dir: Path = Path("public/docs")
    pygments_style: str = "monokai"
    callout_locale: str = "en"
    site_name: str = "Documentation"


__all__ = [
    "SidebarConfig",
    "SidebarOverrides",
    "SidebarTree",
    "SidebarTreeItem",
    "SiteConfig",
    "SiteConfigError",
]
