"""Document-level assessment: does this text warrant specialized handling?

Independent weighted detectors run over the whole normalized text. A
detector that fires contributes its full weight (no partial credit); the
total is rounded to 2 places and capped. The document requires special
handling when the total reaches the trigger (0.40 by default).
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable
from dataclasses import dataclass

from igtx.config import DEFAULT_CONFIG, ParserConfig
from igtx.parsing_types import PdfTextDiagnostics, TierAssessment, TierSignal
from igtx.patterns import (
    RE_ADVERSARIAL,
    RE_COMPLEX_GRAPHEME,
    RE_CONTRACT_HEADER,
    RE_COURT_CAPTION,
    RE_DOCKET_NUMBER,
)
from igtx.profiles import Domain

GRAPHEME_SAMPLE_CHARS = 5000
WORD_SAMPLE_SIZE = 100
LONG_WORD_CHARS = 18
LONG_WORD_SHARE = 0.05
NON_LATIN_SHARE = 0.30
COMPLEX_GRAPHEME_MIN = 5
FRAGMENTATION_LIMIT = 0.3

RECOMMENDED_ACTIONS: dict[Domain, tuple[str, str]] = {
    # (requires special handling, standard handling)
    Domain.LEGAL: (
        "Route to structured legal analysis (caption, docket and party extraction)",
        "Proceed with standard legal line extraction",
    ),
    Domain.LINGUISTIC: (
        "Switch profile to 'polysynthetic'",
        "Proceed with 'generic'",
    ),
}


@dataclass(frozen=True, slots=True)
class Detector:
    """A named detector. ``describe`` returns None when it does not fire."""

    feature: str
    weight: float
    describe: Callable[[str], str | None]


# ── Legal detectors ──────────────────────────────────────────────────


def _docket(text: str) -> str | None:
    m = RE_DOCKET_NUMBER.search(text)
    return f"Index/docket number present ({m.group(0).strip()})" if m else None


def _adversarial(text: str) -> str | None:
    return "Adversarial party pattern (v./vs./against)" if RE_ADVERSARIAL.search(text) else None


def _caption(text: str) -> str | None:
    m = RE_COURT_CAPTION.search(text)
    return f"Court caption present ({m.group(0)})" if m else None


def _contract_header(text: str) -> str | None:
    return "Contract header present" if RE_CONTRACT_HEADER.search(text) else None


LEGAL_DETECTORS: tuple[Detector, ...] = (
    Detector("docket_index", 0.40, _docket),
    Detector("adversarial_caption", 0.30, _adversarial),
    Detector("court_caption", 0.30, _caption),
    Detector("contract_header", 0.50, _contract_header),
)


# ── Linguistic detectors ─────────────────────────────────────────────


def _complex_graphemes(text: str) -> str | None:
    count = len(RE_COMPLEX_GRAPHEME.findall(text[:GRAPHEME_SAMPLE_CHARS]))
    if count > COMPLEX_GRAPHEME_MIN:
        return f"High density of complex graphemes (n={count})"
    return None


def _is_latin_letter(ch: str) -> bool:
    return unicodedata.name(ch, "").startswith("LATIN")


def _non_latin_share(text: str) -> str | None:
    letters = [ch for ch in text[:GRAPHEME_SAMPLE_CHARS] if ch.isalpha()]
    if not letters:
        return None
    non_latin = sum(1 for ch in letters if not _is_latin_letter(ch))
    share = non_latin / len(letters)
    if share > NON_LATIN_SHARE:
        return f"Non-Latin characters make up {share:.0%} of letters"
    return None


def _long_words(text: str) -> str | None:
    words = text.split()[:WORD_SAMPLE_SIZE]
    if not words:
        return None
    long_count = sum(1 for w in words if len(w) > LONG_WORD_CHARS)
    if long_count / len(words) >= LONG_WORD_SHARE:
        return f"Significant long word forms (>{LONG_WORD_CHARS} chars, n={long_count})"
    return None


LINGUISTIC_DETECTORS: tuple[Detector, ...] = (
    Detector("orthographic_complexity", 0.40, _complex_graphemes),
    Detector("script_distribution", 0.30, _non_latin_share),
    Detector("morpheme_density", 0.30, _long_words),
)


def assess_tier(
    text: str,
    domain: Domain,
    diagnostics: PdfTextDiagnostics | None = None,
    *,
    config: ParserConfig = DEFAULT_CONFIG,
) -> TierAssessment:
    """Run every detector for *domain* and aggregate the fired weights."""
    signals: list[TierSignal] = []

    if diagnostics is not None and diagnostics.fragmented_line_ratio > FRAGMENTATION_LIMIT:
        signals.append(TierSignal(
            feature="layout_structure",
            weight=0.20,
            description=(
                f"High line fragmentation (ratio={diagnostics.fragmented_line_ratio:.2f})"
            ),
        ))

    detectors = LEGAL_DETECTORS if domain is Domain.LEGAL else LINGUISTIC_DETECTORS
    for detector in detectors:
        description = detector.describe(text)
        if description is not None:
            signals.append(TierSignal(detector.feature, detector.weight, description))

    total = round(sum(s.weight for s in signals), 2)
    confidence = min(config.tier_cap, total)
    requires = confidence >= config.tier_trigger
    special, standard = RECOMMENDED_ACTIONS[domain]
    return TierAssessment(
        requires_special_handling=requires,
        confidence=confidence,
        signals=tuple(signals),
        recommended_action=special if requires else standard,
    )
