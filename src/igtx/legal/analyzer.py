"""Legal analysis orchestrator.

Runs, in order: date extraction and temporal constraints, reference
extraction and corpus integrity, signature extraction and completeness.
Violations are concatenated in that order. The timestamp is output-only
metadata; no check reads the clock.
"""
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Any

from igtx.config import DEFAULT_CONFIG, ParserConfig
from igtx.io_utils import utc_now_iso
from igtx.legal.constraints import ConstraintChecker
from igtx.legal.dates import DateExtractor
from igtx.legal.document_graph import DocumentGraph, IntegrityChecker
from igtx.legal.references import ReferenceExtractor
from igtx.legal.signatures import CompletenessChecker, SignatureExtractor
from igtx.legal.types import DocumentReference, ExtractedDate, Signature, Violation

log = logging.getLogger("igtx.legal")


@dataclass(frozen=True, slots=True)
class LegalAnalysisResult:
    document_id: str
    dates: tuple[ExtractedDate, ...]
    references: tuple[DocumentReference, ...]
    signatures: tuple[Signature, ...]
    violations: tuple[Violation, ...]
    critical_count: int
    timestamp: str
    rejected_dates: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "document_id": self.document_id,
            "dates": [d.as_dict() for d in self.dates],
            "references": [r.as_dict() for r in self.references],
            "signatures": [s.as_dict() for s in self.signatures],
            "violations": [v.as_dict() for v in self.violations],
            "critical_count": self.critical_count,
            "timestamp": self.timestamp,
            "rejected_dates": list(self.rejected_dates),
        }


class LegalAnalyzer:
    def __init__(self, config: ParserConfig = DEFAULT_CONFIG) -> None:
        self.dates = DateExtractor(config.date_context_radius)
        self.constraints = ConstraintChecker(min_notice_days=config.min_notice_days)
        self.references = ReferenceExtractor()
        self.integrity = IntegrityChecker()
        self.signatures = SignatureExtractor(config.signature_lookahead)
        self.completeness = CompletenessChecker()

    def analyze(
        self,
        text: str,
        *,
        document_id: str = "",
        document_type: str | None = None,
        corpus: DocumentGraph | None = None,
        reference_date: datetime.date | None = None,
        timestamp: str | None = None,
    ) -> LegalAnalysisResult:
        """Analyze one normalized document.

        Args:
            text: Full normalized document text.
            document_id: Identifier echoed into the result.
            document_type: e.g. "Lease Agreement"; completeness only runs
                for lease/contract/agreement types.
            corpus: Sibling documents; integrity is skipped when None.
            reference_date: Upper bound for jurat dates (never the wall clock).
            timestamp: Override for the result timestamp (ISO string).
        """
        extraction = self.dates.extract_all(text)
        dates = list(extraction.dates)
        violations = self.constraints.check(dates, reference_date=reference_date)

        references = self.references.extract(text)
        if corpus is not None:
            violations.extend(self.integrity.check(references, corpus))

        signatures = self.signatures.extract(text)
        violations.extend(self.completeness.check(document_type, signatures))

        critical = sum(1 for v in violations if v.severity == "critical")
        log.debug(
            "legal analysis %s: %d dates (%d rejected), %d violations, %d critical",
            document_id or "<anonymous>", len(dates), len(extraction.rejected),
            len(violations), critical,
        )
        return LegalAnalysisResult(
            document_id=document_id,
            dates=extraction.dates,
            references=tuple(references),
            signatures=tuple(signatures),
            violations=tuple(violations),
            critical_count=critical,
            timestamp=timestamp or utc_now_iso(),
            rejected_dates=extraction.rejected,
        )
