"""
Text helpers: slug generation and excerpts.

``slugify`` and ``allocate_unique`` are pure functions. Given the same
title and the same set of used slugs they always return the same slug.
"""

from __future__ import annotations

import re
import unicodedata
from typing import AbstractSet

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def strip_diacritics(s: str) -> str:
    """Decompose ``s`` and drop its combining marks (``é`` -> ``e``)."""
    decomposed = unicodedata.normalize("NFD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(title: str) -> str:
    """Convert a title into a URL-safe slug.

    The title is lower-cased and stripped of diacritics, every run of
    characters outside ``[a-z0-9]`` becomes a single hyphen, and leading
    or trailing hyphens are trimmed. A title without any letter or
    digit slugifies to ``""``.
    """
    s = strip_diacritics(title.lower())
    s = _NON_ALNUM.sub("-", s)
    return s.strip("-")


def allocate_unique(title: str, used: AbstractSet[str]) -> str:
    """Return a slug for ``title`` that is not in ``used``.

    The base slug is returned when free; otherwise ``-2``, ``-3``, ...
    is appended until a free slug is found.
    """
    base = slugify(title)
    if base not in used:
        return base
    i = 2
    while f"{base}-{i}" in used:
        i += 1
    return f"{base}-{i}"


def excerpt(content: str, words: int = 30) -> str:
    """Return the first ``words`` words of ``content``, with an ellipsis if cut."""
    tokens = content.split()
    head = " ".join(tokens[:words])
    return f"{head}…" if len(tokens) > words else head
