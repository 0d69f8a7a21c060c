"""
app/mappers/display_name.py

Short display labels for product names.

Only the label shown on charts is cleaned; the full product name stays the
grouping key everywhere else.
"""

from __future__ import annotations

from typing import Sequence

from app.config import DEFAULT_FILLER_PREFIXES

UNNAMED_LABEL = "S/N"
ELLIPSIS = "…"


def _strip_prefix(name: str, prefixes: Sequence[str]) -> str | None:
    lowered = name.lower()
    for prefix in prefixes:
        if not prefix or not lowered.startswith(prefix.lower()):
            continue
        rest = name[len(prefix):]
        # Whole words only: "Curso de" must not eat the start of "Curso decorativo".
        if rest and not rest[0].isspace():
            continue
        return rest.lstrip()
    return None


def clean_display_name(
    full_name: str | None,
    *,
    filler_prefixes: Sequence[str] = DEFAULT_FILLER_PREFIXES,
    max_length: int = 20,
    ellipsis: str = ELLIPSIS,
) -> str:
    """
    Derive an uppercase, length-bounded label from ``full_name``.

    Leading filler phrases ("Curso de", "Taller de", ...) are stripped
    case-insensitively, repeatedly. When the result is longer than
    ``max_length`` it is cut and ``ellipsis`` appended.
    """

    original = (full_name or "").strip()
    if not original:
        return UNNAMED_LABEL

    name = original
    while True:
        stripped = _strip_prefix(name, filler_prefixes)
        if stripped is None:
            break
        name = stripped
    if not name:
        name = original

    label = name.upper()
    if len(label) > max_length:
        return label[:max_length].rstrip() + ellipsis
    return label
