"""Legal analysis: dates, constraints, references, corpus integrity, signatures."""

from igtx.legal.analyzer import LegalAnalysisResult, LegalAnalyzer
from igtx.legal.constraints import CONSTRAINTS, Constraint, ConstraintChecker
from igtx.legal.dates import DateExtraction, DateExtractor, classify_date_context
from igtx.legal.document_graph import (
    CorpusDocument,
    CorpusLoadError,
    DocumentGraph,
    IntegrityChecker,
)
from igtx.legal.references import ReferenceExtractor
from igtx.legal.signatures import CompletenessChecker, SignatureExtractor
from igtx.legal.types import (
    DocumentReference,
    ExtractedDate,
    Signature,
    TextSpan,
    Violation,
)

__all__ = [
    "CONSTRAINTS",
    "CompletenessChecker",
    "Constraint",
    "ConstraintChecker",
    "CorpusDocument",
    "CorpusLoadError",
    "DateExtraction",
    "DateExtractor",
    "DocumentGraph",
    "DocumentReference",
    "ExtractedDate",
    "IntegrityChecker",
    "LegalAnalysisResult",
    "LegalAnalyzer",
    "ReferenceExtractor",
    "Signature",
    "SignatureExtractor",
    "TextSpan",
    "Violation",
    "classify_date_context",
]
