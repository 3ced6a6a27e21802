"""Unit tests for word counts and reading-time estimates."""

from __future__ import annotations

import math

import pytest

from docnav.metrics import count_words, reading_time


def test_code_and_link_targets_are_not_counted() -> None:
    """Fenced code, inline code, and link URLs contribute no words."""
    text = (
        "Read the [setup guide](https://example.com/setup) first.\n\n"
        "```python\nprint('lots of code words here')\n```\n\n"
        "Then run `make test` now."
    )
    assert count_words(text) == 8


def test_markup_punctuation_is_ignored() -> None:
    """Heading hashes, emphasis, and quote markers are stripped."""
    assert count_words("# Title\n> quoted **bold** text | cell") == 5


def test_wide_characters_count_individually() -> None:
    """Each ideograph is a word; surrounding latin text is tokenised."""
    assert count_words("中文文档 docs here") == 6


def test_empty_text_has_no_words() -> None:
    assert count_words("   \n\n") == 0


@pytest.mark.parametrize("words", [0, 1, 299, 300, 301, 900, 901])
def test_reading_time_is_ceiling_with_floor_of_one(words: int) -> None:
    """Reading time rounds up at 300 words per minute and never drops below 1."""
    minutes = reading_time(words)
    assert minutes >= 1
    assert minutes == max(1, math.ceil(words / 300))
