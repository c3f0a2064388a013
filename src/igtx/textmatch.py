"""Reusable text-matching primitives for scoring and extraction.

Pure text operations with zero domain dependencies.
"""
from __future__ import annotations

import re

_WS_RE = re.compile(r"\s+")


def contains_any(text: str, phrases: tuple[str, ...] | list[str]) -> bool:
    return any(p in text for p in phrases)


def context_window(
    text: str,
    start: int,
    end: int,
    radius: int,
    *,
    collapse_whitespace: bool = False,
) -> str:
    """Slice ``radius`` characters either side of ``[start, end)``.

    Args:
        text: Full source text.
        start: Match start offset.
        end: Match end offset (exclusive).
        radius: Characters of context on each side, clipped at text bounds.
        collapse_whitespace: If True, runs of whitespace become one space
            and the result is stripped. Otherwise only newlines are
            replaced by spaces.

    Returns:
        The context string.
    """
    window = text[max(0, start - radius): min(len(text), end + radius)]
    if collapse_whitespace:
        return _WS_RE.sub(" ", window).strip()
    return window.replace("\r", " ").replace("\n", " ")


def char_density(text: str, pattern: re.Pattern[str]) -> float:
    """Fraction of characters in *text* matched by a single-char *pattern*."""
    if not text:
        return 0.0
    return len(pattern.findall(text)) / len(text)
