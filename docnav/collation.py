"""Locale-neutral collation keys for slugs and sidebar labels."""

from __future__ import annotations

import unicodedata


def collation_key(value: str) -> tuple[str, str]:
    """Return a sort key that ignores case, width, and accents first.

    The original string breaks ties so the ordering stays total and
    deterministic.

    >>> sorted(["beta", "Alpha", "ＡＢＣ", "alpha"], key=collation_key)
    ['ＡＢＣ', 'Alpha', 'alpha', 'beta']
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), value


__all__ = ["collation_key"]
