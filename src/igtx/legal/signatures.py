"""Signature-block extraction and execution completeness."""
from __future__ import annotations

import re

from igtx.legal.dates import RE_US_DATE, parse_us_date
from igtx.legal.types import Signature, TextSpan, Violation

DEFAULT_LOOKAHEAD = 200

# Lead-in is case-insensitive; the party name must be Title Case words on
# one line ("By: Jane Q Doe" stops at the line break).
RE_SIGNATURE: re.Pattern[str] = re.compile(
    r"(?i:Signed by|Signature of|/s/|By:)\s+([A-Z][a-z]+(?:[^\S\n]+[A-Z][a-z]+)*)"
)

EXECUTED_DOCUMENT_KINDS: tuple[str, ...] = ("lease", "contract", "agreement")


class SignatureExtractor:
    def __init__(self, lookahead: int = DEFAULT_LOOKAHEAD) -> None:
        self.lookahead = lookahead

    def extract(self, text: str) -> list[Signature]:
        signatures: list[Signature] = []
        for m in RE_SIGNATURE.finditer(text):
            window = text[m.start(): m.start() + self.lookahead]
            # Only the first MM/DD/YYYY in the window counts, valid or not.
            date_match = RE_US_DATE.search(window)
            signatures.append(Signature(
                party=m.group(1),
                location=TextSpan(m.start(), m.end()),
                date=parse_us_date(date_match.group(0)) if date_match else None,
            ))
        return signatures


def requires_signature(document_type: str | None) -> bool:
    lower = (document_type or "").lower()
    return any(kind in lower for kind in EXECUTED_DOCUMENT_KINDS)


class CompletenessChecker:
    def check(self, document_type: str | None, signatures: list[Signature]) -> list[Violation]:
        if not requires_signature(document_type) or signatures:
            return []
        return [Violation(
            constraint_id="missing_signature",
            severity="high",
            description=(
                f"No signatures detected in {document_type}; "
                "an unsigned instrument may be unenforceable"
            ),
        )]
