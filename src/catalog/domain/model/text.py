"""Text helpers used by the Item aggregate."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str | None) -> str:
    """Lowercase, strip accents and collapse whitespace.

    ``"  Café   Crème "`` becomes ``"cafe creme"``. Only used for duplicate
    detection and sort order, never shown to callers.
    """
    if title is None:
        return ""
    decomposed = unicodedata.normalize("NFD", title)
    without_marks = "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))
    return _WHITESPACE.sub(" ", without_marks.lower().strip())
