"""Text utilities: display width measurement and character classes."""

from __future__ import annotations

import re

import grapheme
import wcwidth as _wcwidth

# Word characters for word-wise movement and deletion
_WORD_CHAR_RE = re.compile(r"[A-Za-z0-9_]")

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _grapheme_width(g: str) -> int:
    """Return the terminal column width of a single grapheme cluster.

    Control characters are zero width, emoji sequences (VS16, ZWJ, skin tone
    modifiers, regional indicators) are two columns, everything else is
    delegated to wcwidth for the base codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    Uses a fast path for printable ASCII and caches non-ASCII results.
    """
    if not text:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in text):
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += _grapheme_width(g)

    return _cache_width(text, total)


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------

def is_word_char(char: str) -> bool:
    """Return ``True`` if *char* is a letter, digit, or underscore."""
    return bool(_WORD_CHAR_RE.fullmatch(char))


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* is a whitespace character."""
    return char in (" ", "\t", "\n", "\r", "\f", "\v")
