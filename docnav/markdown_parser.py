r"""Parse document metadata and titles out of raw Markdown sources.

This module powers docnav's loader by splitting the optional front-matter
block from the body of a document and resolving human-readable titles from
headings or filenames.

Example
-------
>>> from docnav.markdown_parser import parse_front_matter
>>> meta, body = parse_front_matter("---\ntitle: Intro\n---\n# Heading\n")
>>> meta["title"], body
('Intro', '# Heading\n')
"""

from __future__ import annotations

import re

FRONT_MATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
HEADING_PATTERN = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
TITLE_SEPARATOR_PATTERN = re.compile(r"[\\/_-]+")
BYTE_ORDER_MARK = "\ufeff"

FrontMatter = dict[str, str]


def normalize_source(raw: str) -> str:
    """Return ``raw`` without a leading byte-order marker."""
    return raw.removeprefix(BYTE_ORDER_MARK)


def _strip_quotes(value: str) -> str:
    """Drop one leading and one trailing quote character, independently."""
    if value[:1] in {"'", '"'}:
        value = value[1:]
    if value[-1:] in {"'", '"'}:
        value = value[:-1]
    return value


def parse_front_matter(text: str) -> tuple[FrontMatter, str]:
    """Split a leading ``---`` metadata block from the document body.

    Parameters
    ----------
    text : str
        Raw document text, already normalised with :func:`normalize_source`.

    Returns
    -------
    tuple[FrontMatter, str]
        Parsed ``key: value`` pairs in declaration order and the text that
        follows the closing delimiter. When the document does not open with a
        metadata block the mapping is empty and ``text`` is returned
        unchanged.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text

    metadata: FrontMatter = {}
    for line in match.group(1).split("\n"):
        colon = line.find(":")
        if colon <= 0:
            continue
        key = line[:colon].strip()
        metadata[key] = _strip_quotes(line[colon + 1 :].strip())
    return metadata, text[match.end() :]


def extract_title(body: str) -> str | None:
    """Return the first level-one heading in ``body``, if any."""
    match = HEADING_PATTERN.search(body)
    if match:
        return match.group(1).strip()
    return None


def derive_title(value: str) -> str:
    """Build a display title from a filename or path segment.

    >>> derive_title("getting-started")
    'Getting Started'
    >>> derive_title("public_welfare_station")
    'Public Welfare Station'
    """
    segments = TITLE_SEPARATOR_PATTERN.split(value)
    return " ".join(segment[:1].upper() + segment[1:] for segment in segments)


__all__ = [
    "FrontMatter",
    "derive_title",
    "extract_title",
    "normalize_source",
    "parse_front_matter",
]
