"""Deterministic text normalization ahead of line segmentation."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

UNICODE_NORMALIZATION = "NFC"

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class NormalizedText:
    """NFC text plus the raw line split the block ids are computed over."""

    text: str
    lines: tuple[str, ...]
    normalization_flags: dict[str, bool]


def normalize_text(raw: str | None) -> NormalizedText:
    """NFC-normalize and split on ``\\r?\\n``.

    A lone ``\\r`` is not a line break; it stays inside the line and is
    removed by the per-line trim.
    """
    source = raw or ""
    text = unicodedata.normalize(UNICODE_NORMALIZATION, source)
    flags = {
        "nfc_changed": text != source,
        "crlf_present": "\r\n" in text,
    }
    return NormalizedText(
        text=text,
        lines=tuple(_LINE_SPLIT_RE.split(text)),
        normalization_flags=flags,
    )
