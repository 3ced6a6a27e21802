"""Shared fixtures for the docnav test suite."""

from __future__ import annotations

import typing as typ

import pytest
from loguru import logger

from docnav.models import DocumentRecord

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture
def log_messages() -> cabc.Iterator[list[str]]:
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


def _make_document(slug: str, title: str | None = None) -> DocumentRecord:
    return DocumentRecord(
        slug=slug,
        section=slug.split("/", 1)[0],
        title=title or slug.rsplit("/", 1)[-1].title(),
        raw_body="",
        html="",
        word_count=0,
        reading_time=1,
    )


@pytest.fixture
def make_document() -> cabc.Callable[..., DocumentRecord]:
    """Return a factory for minimal DocumentRecord instances."""
    return _make_document

