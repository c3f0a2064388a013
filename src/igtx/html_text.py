"""HTML pleading to plain-text conversion and encoding-safe file reading.

Block-level elements become line breaks so the line pipeline sees one
paragraph, caption row or list item per line.
"""
from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup

_BLOCK_TAGS: list[str] = [
    "p", "div", "br", "tr", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "table", "blockquote", "pre",
]

_DROP_TAGS: list[str] = ["script", "style", "head"]

# U+200B (ZWSP), U+200C (ZWNJ), U+FEFF (BOM)
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\ufeff]")

_HTML_SNIFF_RE = re.compile(r"<\s*(?:html|body|p|div|br|table)\b", re.IGNORECASE)


def looks_like_html(text: str) -> bool:
    return bool(_HTML_SNIFF_RE.search(text[:4096]))


def strip_html(raw_html: str) -> str:
    """Extract text from HTML, one block-level element per line.

    Returns:
        Cleaned text. Empty string if *raw_html* is empty.
    """
    if not raw_html:
        return ""
    soup = BeautifulSoup(raw_html, "html.parser")
    for tag in soup.find_all(_DROP_TAGS):
        # A <style> inside <head> goes with its parent.
        if not tag.decomposed:
            tag.decompose()
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.insert_before("\n")
    text = soup.get_text()
    text = re.sub(r"[^\S\n]+", " ", text)
    text = re.sub(r" ?\n ?", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return strip_zero_width(text.strip())


def strip_zero_width(text: str) -> str:
    """Remove zero-width characters that silently break regex matching."""
    return _ZERO_WIDTH_RE.sub("", text)


def read_file(fpath: Path) -> str:
    """Read a text file with encoding fallback: UTF-8 -> CP1252 -> replace.

    CP1252 covers word-processor exports with smart quotes (0x93/0x94).
    """
    try:
        return fpath.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        try:
            return fpath.read_text(encoding="cp1252")
        except UnicodeDecodeError:
            return fpath.read_bytes().decode("utf-8", errors="replace")
