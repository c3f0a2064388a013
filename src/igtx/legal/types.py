"""Facts extracted from a legal document and the violations built on them.

Every violation carries the dates (or references) that produced it so a
reviewer can jump straight to the offending text.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Literal

type DateType = Literal["jurat", "filing", "signature", "service", "hearing", "reference"]
type Severity = Literal["critical", "high", "medium", "low"]


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Character span ``[start, end)`` in the normalized document text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"end must be >= start, got {self.end} < {self.start}")

    def as_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True, slots=True)
class ExtractedDate:
    date: datetime.date
    text: str            # the matched surface form
    context: str         # ±50 chars, whitespace collapsed
    type: DateType
    location: TextSpan

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "text": self.text,
            "context": self.context,
            "type": self.type,
            "location": self.location.as_dict(),
        }


@dataclass(frozen=True, slots=True)
class DocumentReference:
    text: str
    location: TextSpan
    year: int | None = None
    document_type: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "year": self.year,
            "document_type": self.document_type,
            "location": self.location.as_dict(),
        }


@dataclass(frozen=True, slots=True)
class Signature:
    party: str
    location: TextSpan
    date: datetime.date | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "party": self.party,
            "date": self.date.isoformat() if self.date else None,
            "location": self.location.as_dict(),
        }


@dataclass(frozen=True, slots=True)
class Violation:
    constraint_id: str
    severity: Severity
    description: str
    dates: tuple[ExtractedDate, ...] = ()
    references: tuple[DocumentReference, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "constraint_id": self.constraint_id,
            "severity": self.severity,
            "description": self.description,
            "dates": [d.as_dict() for d in self.dates],
            "references": [r.as_dict() for r in self.references],
        }
