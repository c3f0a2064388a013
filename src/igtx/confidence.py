"""Per-line confidence scoring for the extraction pipeline.

Every line starts at a 0.5 baseline and collects independent additive
adjustments. Adjustments are order-insensitive: each one looks only at
the cleaned line and the profile, never at the running score. The sum is
clamped to [0, 1] for linguistic text and capped at 0.99 for legal text.

A line is retained as a block iff its score reaches the domain threshold
(see :class:`igtx.config.ParserConfig`).

Rules look at the line after its enumerator prefix is removed. A bare
page number such as ``42`` is itself taken as the enumerator, so it
scores as ``Empty``; the page-number artifact rule only sees what is
left behind a prefix, as in ``1. 42``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from igtx.patterns import (
    FUNCTION_WORDS,
    LEGAL_KEYWORDS,
    RE_ADVERSARIAL,
    RE_COURT_CAPTION,
    RE_DOCKET_NUMBER,
    RE_ENUMERATOR_PREFIX,
    RE_GLOSS_CHAR,
    RE_MORPH_DENSE_MARKER,
    RE_PAGE_NUMBER,
    RE_RECITALS_OPENER,
    RE_STRONG_NATIVE_CHAR,
    RE_WORD_SPLIT,
)
from igtx.profiles import Domain, LanguageProfile
from igtx.textmatch import char_density, contains_any

BASELINE_SCORE = 0.5
LEGAL_SCORE_CAP = 0.99
GLOSS_DENSITY_LIMIT = 0.15

EMPTY_WARNING = "Empty"


@dataclass(frozen=True, slots=True)
class LineScore:
    score: float
    warnings: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ScoreAdjustment:
    """One independent additive signal.

    ``applies`` receives the cleaned line and the active profile.
    """

    name: str
    delta: float
    applies: Callable[[str, LanguageProfile], bool]
    warning: str | None = None


def clean_line(line: str) -> str:
    """Trim and drop a leading enumerator such as ``12.`` or ``(3)``."""
    return RE_ENUMERATOR_PREFIX.sub("", line.strip(), count=1).strip()


# ── Legal adjustments ────────────────────────────────────────────────


def _has_legal_keyword(text: str, _profile: LanguageProfile) -> bool:
    return contains_any(text.upper(), LEGAL_KEYWORDS)


def _has_caption_or_docket(text: str, _profile: LanguageProfile) -> bool:
    return bool(RE_COURT_CAPTION.search(text) or RE_DOCKET_NUMBER.search(text))


def _is_adversarial(text: str, _profile: LanguageProfile) -> bool:
    return bool(RE_ADVERSARIAL.search(text))


def _opens_recitals(text: str, _profile: LanguageProfile) -> bool:
    return bool(RE_RECITALS_OPENER.match(text))


def _is_page_number(text: str, _profile: LanguageProfile) -> bool:
    return len(text) < 4 and bool(RE_PAGE_NUMBER.match(text))


def _is_long(text: str, _profile: LanguageProfile) -> bool:
    return len(text) > 50


LEGAL_ADJUSTMENTS: tuple[ScoreAdjustment, ...] = (
    ScoreAdjustment("legal_keyword", 0.40, _has_legal_keyword),
    ScoreAdjustment("caption_or_docket", 0.45, _has_caption_or_docket),
    ScoreAdjustment("adversarial_parties", 0.35, _is_adversarial),
    ScoreAdjustment("recitals_opener", 0.40, _opens_recitals),
    ScoreAdjustment(
        "page_number_artifact", -0.40, _is_page_number,
        warning="Likely page number artifact",
    ),
    ScoreAdjustment("long_line", 0.10, _is_long),
)


# ── Linguistic adjustments ───────────────────────────────────────────


def _has_native_script(text: str, _profile: LanguageProfile) -> bool:
    return bool(RE_STRONG_NATIVE_CHAR.search(text))


def _has_dense_morphology(text: str, profile: LanguageProfile) -> bool:
    return (
        profile is LanguageProfile.MORPHOLOGICAL_DENSE
        and bool(RE_MORPH_DENSE_MARKER.search(text))
    )


def _is_gloss_dense(text: str, profile: LanguageProfile) -> bool:
    if profile is LanguageProfile.POLYSYNTHETIC:
        return False
    return char_density(text, RE_GLOSS_CHAR) > GLOSS_DENSITY_LIMIT


def _starts_with_function_word(text: str, _profile: LanguageProfile) -> bool:
    words = [w for w in RE_WORD_SPLIT.split(text) if w]
    return bool(words) and words[0].lower() in FUNCTION_WORDS


LINGUISTIC_ADJUSTMENTS: tuple[ScoreAdjustment, ...] = (
    ScoreAdjustment("native_script", 0.35, _has_native_script),
    ScoreAdjustment("dense_morphology", 0.15, _has_dense_morphology),
    ScoreAdjustment(
        "gloss_density", -0.35, _is_gloss_dense,
        warning="High density of gloss markers",
    ),
    ScoreAdjustment(
        "function_word_opener", -0.30, _starts_with_function_word,
        warning="Starts with common function word (likely translation)",
    ),
)


# ── Scoring ──────────────────────────────────────────────────────────


def apply_adjustments(
    text: str,
    profile: LanguageProfile,
    adjustments: tuple[ScoreAdjustment, ...],
) -> tuple[float, list[str]]:
    """Sum every firing adjustment onto the baseline."""
    score = BASELINE_SCORE
    warnings: list[str] = []
    for adj in adjustments:
        if adj.applies(text, profile):
            score += adj.delta
            if adj.warning:
                warnings.append(adj.warning)
    return score, warnings


def score_line(
    line: str,
    profile: LanguageProfile,
    domain: Domain,
    *,
    legal_cap: float = LEGAL_SCORE_CAP,
) -> LineScore:
    """Score one line for the given domain.

    Args:
        line: A raw or trimmed line; the enumerator prefix is stripped here.
        profile: Active language profile (only linguistic rules read it).
        domain: ``legal`` or ``linguistic``.
        legal_cap: Upper bound for legal scores.

    Returns:
        LineScore with the score rounded to 4 places. A line that is empty
        after cleanup scores 0 with the single warning ``"Empty"``.
    """
    text = clean_line(line)
    if not text:
        return LineScore(0.0, (EMPTY_WARNING,))

    if domain is Domain.LEGAL:
        score, warnings = apply_adjustments(text, profile, LEGAL_ADJUSTMENTS)
        score = max(0.0, min(legal_cap, score))
    else:
        score, warnings = apply_adjustments(text, profile, LINGUISTIC_ADJUSTMENTS)
        score = max(0.0, min(1.0, score))
    return LineScore(round(score, 4), tuple(warnings))
