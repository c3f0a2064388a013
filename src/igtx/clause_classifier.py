"""Heuristic clause-type and complexity classification for one line.

Classification is a priority chain: rules are evaluated top to bottom and
the first one that fires decides ``(clause_type, complexity)``. Legal
text then goes through a second, override pass that can force a type or
adjust the complexity.

Base chain (first match wins):
    1. fragment          short line that is not a finished clause   0.10
    2. complex_embedded  parenthetical / bracket markers            0.80 + 0.05/marker
    3. chain_clause      >= 2 strong separators                     0.70 + 0.10/sep
       compound          exactly 1 strong separator                 0.60
    4. complex_embedded  subordinator or conditional opener         0.85
       complex_embedded  relative pronoun + comma                   0.70
       compound          coordinator within 3 tokens after a comma  0.60
       simple            1-3 commas                                 0.40
       chain_clause      > 3 commas, no coordinator                 0.50
       simple            default                                    0.20 + min(0.30, 0.015/token)

Legal overrides (applied in order, each may fire):
    WHEREFORE opener -> chain_clause 0.90
    WHEREAS opener   -> complex_embedded 0.85
    citation shape   -> complexity - 0.20, not below 0.30
    conditional      -> complex_embedded, complexity >= 0.80

No file I/O; pure functions only.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from igtx.parsing_types import ClauseType, StructuralAnalysis
from igtx.patterns import (
    AUXILIARY_VERBS,
    COORDINATORS,
    RE_CITATION,
    RE_CONDITIONAL_OPENER,
    RE_EMBEDDING_MARKER,
    RE_STRONG_SEPARATOR,
    RE_TERMINAL_PUNCT,
    RELATIVE_PRONOUNS,
    SUBORDINATORS,
)
from igtx.profiles import Domain

COMPLEXITY_CAP = 0.99
FRAGMENT_MAX_TOKENS = 4
COORDINATOR_WINDOW = 3

_EDGE_PUNCT_RE = re.compile(r"^\W+|\W+$")


@dataclass(frozen=True, slots=True)
class LineShape:
    """Token-level features computed once per line."""

    text: str
    tokens: tuple[str, ...]
    words: tuple[str, ...]   # lowercased, edge punctuation stripped
    comma_positions: tuple[int, ...]   # token indices that end with a comma
    separator_count: int
    marker_count: int

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def comma_count(self) -> int:
        return self.text.count(",")


def _line_shape(text: str) -> LineShape:
    tokens = tuple(text.split())
    words = tuple(_EDGE_PUNCT_RE.sub("", t).lower() for t in tokens)
    commas = tuple(i for i, t in enumerate(tokens) if "," in t)
    return LineShape(
        text=text,
        tokens=tokens,
        words=words,
        comma_positions=commas,
        separator_count=len(RE_STRONG_SEPARATOR.findall(text)),
        marker_count=len(RE_EMBEDDING_MARKER.findall(text)),
    )


type Effect = tuple[ClauseType, float]
type Rule = tuple[str, Callable[[LineShape], Effect | None]]


# ── Base chain ───────────────────────────────────────────────────────


def _fragment(shape: LineShape) -> Effect | None:
    # A short line only counts as a full clause when it is both
    # punctuated and carries an auxiliary verb.
    if shape.token_count >= FRAGMENT_MAX_TOKENS:
        return None
    terminal = bool(RE_TERMINAL_PUNCT.search(shape.text))
    has_aux = any(w in AUXILIARY_VERBS for w in shape.words)
    if terminal and has_aux:
        return None
    return "fragment", 0.1


def _embedded_markers(shape: LineShape) -> Effect | None:
    if shape.marker_count == 0:
        return None
    return "complex_embedded", 0.8 + 0.05 * shape.marker_count


def _strong_separators(shape: LineShape) -> Effect | None:
    if shape.separator_count >= 2:
        return "chain_clause", 0.7 + 0.1 * shape.separator_count
    if shape.separator_count == 1:
        return "compound", 0.6
    return None


def _coordinator_follows_comma(shape: LineShape) -> bool:
    for comma_idx in shape.comma_positions:
        window = shape.words[comma_idx + 1: comma_idx + 1 + COORDINATOR_WINDOW]
        if any(w in COORDINATORS for w in window):
            return True
    return False


def _conjunctions(shape: LineShape) -> Effect | None:
    words = set(shape.words)
    commas = shape.comma_count
    if words & SUBORDINATORS or RE_CONDITIONAL_OPENER.match(shape.text):
        return "complex_embedded", 0.85
    if words & RELATIVE_PRONOUNS and commas >= 1:
        return "complex_embedded", 0.7
    has_coordinator = bool(words & COORDINATORS)
    if has_coordinator and commas >= 1 and _coordinator_follows_comma(shape):
        return "compound", 0.6
    if 1 <= commas <= 3:
        return "simple", 0.4
    if commas > 2 and not has_coordinator:
        return "chain_clause", 0.5
    return None


def _default(shape: LineShape) -> Effect:
    return "simple", 0.2 + min(0.3, 0.015 * shape.token_count)


BASE_RULES: tuple[Rule, ...] = (
    ("fragment", _fragment),
    ("embedded_markers", _embedded_markers),
    ("strong_separators", _strong_separators),
    ("conjunctions", _conjunctions),
)


# ── Legal overrides ──────────────────────────────────────────────────


def _legal_overrides(text: str, clause_type: ClauseType, complexity: float) -> Effect:
    upper = text.lstrip().upper()
    if upper.startswith("WHEREFORE"):
        clause_type, complexity = "chain_clause", 0.9
    elif upper.startswith("WHEREAS"):
        clause_type, complexity = "complex_embedded", 0.85
    if RE_CITATION.search(text) and complexity > 0.3:
        complexity = max(0.3, complexity - 0.2)
    if RE_CONDITIONAL_OPENER.match(text.lstrip()):
        clause_type, complexity = "complex_embedded", max(complexity, 0.8)
    return clause_type, complexity


# ── Public API ───────────────────────────────────────────────────────


def classify_structure(text: str, domain: Domain) -> StructuralAnalysis:
    """Classify the clause structure of one cleaned line."""
    shape = _line_shape(text.strip())
    if shape.token_count == 0:
        return StructuralAnalysis(
            complexity_score=0.0,
            clause_type="fragment",
            token_count=0,
            avg_token_length=0.0,
        )

    effect: Effect | None = None
    for _name, rule in BASE_RULES:
        effect = rule(shape)
        if effect is not None:
            break
    clause_type, complexity = effect if effect is not None else _default(shape)

    if domain is Domain.LEGAL:
        clause_type, complexity = _legal_overrides(shape.text, clause_type, complexity)

    avg_len = sum(len(t) for t in shape.tokens) / shape.token_count
    return StructuralAnalysis(
        complexity_score=round(min(COMPLEXITY_CAP, complexity), 2),
        clause_type=clause_type,
        token_count=shape.token_count,
        avg_token_length=round(avg_len, 1),
    )
