"""Rewrite marked blockquotes into titled call-out containers.

A blockquote whose first paragraph opens with ``[!tip]``, ``[!info]``,
``[!warning]``, ``[!danger]`` or ``[!note]`` (any case) is rendered as::

    <div class="callout callout--warning">
      <div class="callout__icon"><svg .../></div>
      <div class="callout__content">
        <div class="callout__title">Warning</div>
        ...remaining blockquote content...
      </div>
    </div>

Blockquotes without a recognised marker are left untouched.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

CALLOUT_PATTERN = re.compile(r"^\[!(tip|info|warning|danger|note)\]\s*", re.IGNORECASE)

CALLOUT_ICONS: dict[str, str] = {
    "tip": (
        '<svg viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M9 18h6M10 22h4M12 2v1M12 6a4 4 0 0 1 4 4c0 1.5-.8 2.8-2 3.5V15H10'
        'v-1.5C8.8 12.8 8 11.5 8 10a4 4 0 0 1 4-4z"/></svg>'
    ),
    "info": (
        '<svg viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<circle cx="12" cy="12" r="10"/><line x1="12" y1="16" x2="12" y2="12"/>'
        '<line x1="12" y1="8" x2="12.01" y2="8"/></svg>'
    ),
    "warning": (
        '<svg viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M10.29 3.86L1.82 18a2 2 0 0 0 1.71 3h16.94a2 2 0 0 0 1.71-3L13.71 '
        '3.86a2 2 0 0 0-3.42 0z"/><line x1="12" y1="9" x2="12" y2="13"/>'
        '<line x1="12" y1="17" x2="12.01" y2="17"/></svg>'
    ),
    "danger": (
        '<svg viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<circle cx="12" cy="12" r="10"/><line x1="15" y1="9" x2="9" y2="15"/>'
        '<line x1="9" y1="9" x2="15" y2="15"/></svg>'
    ),
    "note": (
        '<svg viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M14 2H6a2 2 0 0 0-2 2v16a2 2 0 0 0 2 2h12a2 2 0 0 0 2-2V8z"/>'
        '<polyline points="14 2 14 8 20 8"/><line x1="16" y1="13" x2="8" y2="13"/>'
        '<line x1="16" y1="17" x2="8" y2="17"/></svg>'
    ),
}

CALLOUT_TITLES: dict[str, dict[str, str]] = {
    "en": {
        "tip": "Tip",
        "info": "Info",
        "warning": "Warning",
        "danger": "Danger",
        "note": "Note",
    },
    "zh": {
        "tip": "提示",
        "info": "信息",
        "warning": "警告",
        "danger": "危险",
        "note": "注意",
    },
}
DEFAULT_LOCALE = "en"


def callout_titles(locale: str | None) -> dict[str, str]:
    """Return the title table for ``locale``, falling back to English."""
    if locale and locale in CALLOUT_TITLES:
        return CALLOUT_TITLES[locale]
    base = (locale or "").split("-", 1)[0].split("_", 1)[0].lower()
    return CALLOUT_TITLES.get(base, CALLOUT_TITLES[DEFAULT_LOCALE])


class CalloutExtension(Extension):
    """Register the call-out treeprocessor on a Markdown instance."""

    def __init__(self, locale: str | None = DEFAULT_LOCALE) -> None:
        super().__init__()
        self.titles = callout_titles(locale)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run before inline parsing so the marker is matched on raw text."""
        md.treeprocessors.register(
            CalloutTreeprocessor(md, self.titles), "docnav_callouts", 30
        )


class CalloutTreeprocessor(Treeprocessor):
    """Turn marked blockquotes into call-out containers."""

    def __init__(self, md: Markdown, titles: dict[str, str]) -> None:
        super().__init__(md)
        self.titles = titles

    def run(self, root: Element) -> None:
        """Rewrite each marked blockquote in document order."""
        for quote in list(root.iter("blockquote")):
            kind = self._consume_marker(quote)
            if kind:
                self._rewrite(quote, kind)

    @staticmethod
    def _consume_marker(quote: Element) -> str | None:
        """Strip the marker from the first paragraph and return its type."""
        if len(quote) == 0:
            return None
        first = quote[0]
        if first.tag != "p" or not first.text:
            return None
        match = CALLOUT_PATTERN.match(first.text)
        if not match:
            return None
        remainder = first.text[match.end() :]
        if remainder or len(first):
            first.text = remainder
        else:
            quote.remove(first)
        return match.group(1).lower()

    def _rewrite(self, quote: Element, kind: str) -> None:
        children = list(quote)
        for child in children:
            quote.remove(child)
        quote.tag = "div"
        quote.text = None
        quote.set("class", f"callout callout--{kind}")

        icon = quote.makeelement("div", {"class": "callout__icon"})
        icon.text = AtomicString(self.md.htmlStash.store(CALLOUT_ICONS[kind]))
        content = quote.makeelement("div", {"class": "callout__content"})
        title = content.makeelement("div", {"class": "callout__title"})
        title.text = AtomicString(self.titles[kind])
        content.append(title)
        content.extend(children)
        quote.append(icon)
        quote.append(content)


__all__ = [
    "CALLOUT_ICONS",
    "CALLOUT_PATTERN",
    "CALLOUT_TITLES",
    "CalloutExtension",
    "CalloutTreeprocessor",
    "callout_titles",
]
