"""Word counts and reading-time estimates for document bodies."""

from __future__ import annotations

import math
import re

from ._constants import WORDS_PER_MINUTE

FENCED_CODE_PATTERN = re.compile(r"```.*?```", re.DOTALL)
INLINE_CODE_PATTERN = re.compile(r"`[^`]*`")
LINK_PATTERN = re.compile(r"\[([^\]]*)\]\([^)]*\)")
MARKER_PATTERN = re.compile(r"[#*_~`>|]")
WHITESPACE_PATTERN = re.compile(r"\s+")
# CJK unified ideographs; each character reads as one word.
WIDE_CHAR_PATTERN = re.compile("[\u4e00-\u9fa5]")


def _clean(text: str) -> str:
    cleaned = FENCED_CODE_PATTERN.sub("", text)
    cleaned = INLINE_CODE_PATTERN.sub("", cleaned)
    cleaned = LINK_PATTERN.sub(r"\1", cleaned)
    cleaned = MARKER_PATTERN.sub("", cleaned)
    return WHITESPACE_PATTERN.sub(" ", cleaned).strip()


def count_words(text: str) -> int:
    """Count words in Markdown ``text``, ignoring code and markup.

    Every ideographic character counts as a word of its own; everything else
    is counted as whitespace-delimited tokens.

    >>> count_words("Hello `code` [world](https://example.com)")
    2
    >>> count_words("中文 text")
    3
    """
    cleaned = _clean(text)
    wide = len(WIDE_CHAR_PATTERN.findall(cleaned))
    narrow = WIDE_CHAR_PATTERN.sub(" ", cleaned).split()
    return wide + len(narrow)


def reading_time(word_count: int) -> int:
    """Return the estimated reading time in whole minutes, never below one."""
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


__all__ = ["count_words", "reading_time"]
