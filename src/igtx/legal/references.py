"""Cross-document reference extraction.

Three reference shapes, scanned in this order:

    "2019 Residential Lease Agreement"   year + Title Case words + type
    "Order ... dated ... 2020"           type, then "dated", then a year
    "Exhibit A" / "Attachment 3"         exhibit-style label

Matches from different shapes are not de-duplicated.
"""
from __future__ import annotations

import re

from igtx.legal.types import DocumentReference, TextSpan

DOCUMENT_TYPES: tuple[str, ...] = (
    "Agreement", "Contract", "Notice", "Order", "Exhibit", "Attachment", "Lease",
)

REFERENCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(\d{4})\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\s+(Agreement|Contract|Notice|Order|Lease)",
        re.IGNORECASE,
    ),
    re.compile(r"(Agreement|Contract|Notice|Order|Lease)[^,]*dated[^,]*(\d{4})", re.IGNORECASE),
    re.compile(r"(Exhibit|Attachment|Appendix)\s+([A-Z0-9]+)", re.IGNORECASE),
)

RE_REFERENCE_YEAR: re.Pattern[str] = re.compile(r"\b(?:19|20)\d{2}\b")

_TYPE_RES: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (name, re.compile(rf"\b{name}\b", re.IGNORECASE)) for name in DOCUMENT_TYPES
)


def reference_year(text: str) -> int | None:
    m = RE_REFERENCE_YEAR.search(text)
    return int(m.group(0)) if m else None


def reference_type(text: str) -> str | None:
    """First vocabulary type named in *text*, in vocabulary order."""
    for name, pattern in _TYPE_RES:
        if pattern.search(text):
            return name
    return None


class ReferenceExtractor:
    def extract(self, text: str) -> list[DocumentReference]:
        refs: list[DocumentReference] = []
        for pattern in REFERENCE_PATTERNS:
            for m in pattern.finditer(text):
                ref_text = m.group(0)
                refs.append(DocumentReference(
                    text=ref_text,
                    location=TextSpan(m.start(), m.end()),
                    year=reference_year(ref_text),
                    document_type=reference_type(ref_text),
                ))
        return refs
