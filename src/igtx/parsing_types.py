"""Core types shared by every pipeline stage.

All entities are created once per pipeline run and are read-only
afterwards, so every dataclass is frozen. Collections are tuples.

Type hierarchy:
  Ok[T] / Err[E]         Strict algebraic Result type
  StructuralAnalysis     Clause-type classification of one line
  Block                  One retained, scored line
  PdfTextDiagnostics     Layout statistics from the PDF/OCR collaborator
  TierSignal             One fired tier-assessment detector
  TierAssessment         Document-level specialized-handling judgment
  SourceMetadata         Caller-supplied provenance of the raw text
  CustomRule             User-authored extraction regex
  CustomExtraction       One custom-rule match
  ParseStats             Line counters + mean confidence
  ParseReport            Everything one pipeline run produces
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from igtx.legal.analyzer import LegalAnalysisResult

# ---------------------------------------------------------------------------
# Result ADT: strict Ok/Err, not a (value, error) tuple
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success case of Result[T, E].

    Usage::

        result: Result[re.Pattern[str], PatternError] = Ok(compiled)
        match result:
            case Ok(value=v): print(v.pattern)
            case Err(error=e): print(e.message)
    """
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure case of Result[T, E].

    Keeps the typed failure reason. A user rule that fails to compile is
    reported back to its author, not silently turned into None.
    """
    error: E


type Result[T, E] = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Line-level types
# ---------------------------------------------------------------------------

type ClauseType = Literal[
    "simple", "fragment", "compound", "chain_clause", "complex_embedded",
]


@dataclass(frozen=True, slots=True)
class StructuralAnalysis:
    """Heuristic syntactic complexity of one line."""
    complexity_score: float   # [0, 0.99]
    clause_type: ClauseType
    token_count: int
    avg_token_length: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "complexity_score": self.complexity_score,
            "clause_type": self.clause_type,
            "token_count": self.token_count,
            "avg_token_length": self.avg_token_length,
        }


@dataclass(frozen=True, slots=True)
class ContextualSignal:
    """Advisory neighbour-aware annotation. Never alters confidence."""
    contextual_boost: float
    warnings: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "contextual_boost": self.contextual_boost,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True, slots=True)
class Block:
    """One retained, scored unit of extracted text.

    ``id`` is the content address of (trimmed line, line index); see
    :func:`igtx.hashing.compute_block_id`. External enrichment attaches
    its data keyed by ``id`` and never touches these fields.
    """
    id: str
    raw_source: str          # line as it appeared after normalization
    clean_text: str          # trimmed, enumerator prefix removed
    confidence: float
    warnings: tuple[str, ...]
    line_number: int         # 1-based
    structural: StructuralAnalysis | None = None
    contextual: ContextualSignal | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Block.confidence must be in [0, 1], got {self.confidence}"
            )
        if self.line_number < 1:
            raise ValueError(
                f"Block.line_number must be >= 1, got {self.line_number}"
            )

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "raw_source": self.raw_source,
            "clean_text": self.clean_text,
            "confidence": self.confidence,
            "warnings": list(self.warnings),
            "line_number": self.line_number,
            "structural": self.structural.as_dict() if self.structural else None,
            "contextual": self.contextual.as_dict() if self.contextual else None,
        }


# ---------------------------------------------------------------------------
# Document-level types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PdfTextDiagnostics:
    """Layout statistics produced by the PDF/OCR extraction collaborator."""
    total_lines: int
    fragmented_line_ratio: float
    avg_line_length: float
    hyphen_break_count: int
    is_ocr: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PdfTextDiagnostics:
        return cls(
            total_lines=int(data.get("total_lines", 0)),
            fragmented_line_ratio=float(data.get("fragmented_line_ratio", 0.0)),
            avg_line_length=float(data.get("avg_line_length", 0.0)),
            hyphen_break_count=int(data.get("hyphen_break_count", 0)),
            is_ocr=bool(data.get("is_ocr", False)),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_lines": self.total_lines,
            "fragmented_line_ratio": self.fragmented_line_ratio,
            "avg_line_length": self.avg_line_length,
            "hyphen_break_count": self.hyphen_break_count,
            "is_ocr": self.is_ocr,
        }


@dataclass(frozen=True, slots=True)
class TierSignal:
    """A detector that fired during tier assessment (full weight, no partial credit)."""
    feature: str
    weight: float
    description: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "feature": self.feature,
            "weight": self.weight,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class TierAssessment:
    requires_special_handling: bool
    confidence: float
    signals: tuple[TierSignal, ...]
    recommended_action: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "requires_special_handling": self.requires_special_handling,
            "confidence": self.confidence,
            "signals": [s.as_dict() for s in self.signals],
            "recommended_action": self.recommended_action,
        }


RE_SOURCE_YEAR: re.Pattern[str] = re.compile(r"\b(1[5-9]\d\d|20\d\d)\b")


def coerce_year(value: Any) -> int | None:
    """Pull a 4-digit year out of free-form metadata ('c. 1910' -> 1910).

    Anything without a plausible year ('n.d.', '', None) gives None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    m = RE_SOURCE_YEAR.search(str(value))
    return int(m.group(1)) if m else None


@dataclass(frozen=True, slots=True)
class SourceMetadata:
    """Caller-supplied provenance. Missing values get envelope defaults."""
    title: str = "Untitled Document"
    author: str = "Unknown"
    year: int | None = None
    language: str = "und"          # ISO-639-3
    orthography: str = "standard"
    source_type: str = "legacy_text"
    source_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> SourceMetadata:
        data = data or {}
        return cls(
            title=str(data.get("title") or "Untitled Document"),
            author=str(data.get("author") or "Unknown"),
            year=coerce_year(data.get("year")),
            language=str(data.get("language") or "und"),
            orthography=str(data.get("orthography") or "standard"),
            source_type=str(data.get("source_type") or "legacy_text"),
            source_url=data.get("source_url") or None,
        )

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "author": self.author,
            "year": self.year,
            "language": self.language,
            "orthography": self.orthography,
            "source_type": self.source_type,
        }
        if self.source_url:
            out["source_url"] = self.source_url
        return out


# ---------------------------------------------------------------------------
# Custom rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CustomRule:
    """A user-authored regular expression applied to the whole document."""
    id: str
    name: str
    pattern: str
    flags: str | None = None      # JavaScript-style, e.g. "gi"; None -> "gi"
    active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomRule:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            pattern=str(data.get("pattern", "")),
            flags=data.get("flags") or None,
            active=bool(data.get("active", True)),
        )


@dataclass(frozen=True, slots=True)
class CustomExtraction:
    rule_id: str
    rule_name: str
    match: str
    index: int                    # char offset in the normalized text
    context: str                  # ±20 chars, newlines replaced by spaces

    def as_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "match": self.match,
            "index": self.index,
            "context": self.context,
        }


# ---------------------------------------------------------------------------
# Pipeline output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseStats:
    total_lines: int
    extracted_lines: int
    average_confidence: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_lines": self.total_lines,
            "extracted_lines": self.extracted_lines,
            "average_confidence": self.average_confidence,
        }


@dataclass(frozen=True, slots=True)
class ParseReport:
    """Output contract of one pipeline run."""
    blocks: tuple[Block, ...]
    full_extracted_text: str
    tier_assessment: TierAssessment
    stats: ParseStats
    envelope: dict[str, Any]
    custom_extractions: tuple[CustomExtraction, ...] = ()
    warnings: tuple[str, ...] = ()
    legal_analysis: LegalAnalysisResult | None = None
    enrichment: dict[str, dict[str, Any]] = field(default_factory=dict[str, dict[str, Any]])

    @property
    def document_id(self) -> str:
        return str(self.envelope["document_id"])

    def as_dict(self) -> dict[str, Any]:
        return {
            "blocks": [b.as_dict() for b in self.blocks],
            "full_extracted_text": self.full_extracted_text,
            "tier_assessment": self.tier_assessment.as_dict(),
            "stats": self.stats.as_dict(),
            "envelope": self.envelope,
            "custom_extractions": [c.as_dict() for c in self.custom_extractions],
            "warnings": list(self.warnings),
            "legal_analysis": (
                self.legal_analysis.as_dict() if self.legal_analysis else None
            ),
            "enrichment": self.enrichment,
        }
