"""Per-domain strategy objects for the line pipeline.

Legal and linguistic heuristics differ in which adjustments fire, how the
score is bounded, and the retention threshold. The pipeline talks to one
``DomainStrategy`` and never branches on the domain itself.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from igtx.clause_classifier import classify_structure
from igtx.config import DEFAULT_CONFIG, ParserConfig
from igtx.confidence import LineScore, score_line
from igtx.parsing_types import StructuralAnalysis
from igtx.profiles import Domain, LanguageProfile


class DomainStrategy(ABC):
    """Common ``{score, classify}`` capability over one domain."""

    domain: Domain

    def __init__(
        self,
        profile: LanguageProfile = LanguageProfile.GENERIC,
        config: ParserConfig = DEFAULT_CONFIG,
    ) -> None:
        self.profile = profile
        self.config = config

    @property
    def threshold(self) -> float:
        return self.config.threshold_for(self.domain)

    @abstractmethod
    def score(self, line: str) -> LineScore:
        """Confidence score and warnings for one raw line."""

    def classify(self, text: str) -> StructuralAnalysis:
        return classify_structure(text, self.domain)

    def retains(self, line_score: LineScore) -> bool:
        """A line becomes a block iff its score reaches the threshold."""
        return line_score.score >= self.threshold


class LegalStrategy(DomainStrategy):
    domain = Domain.LEGAL

    def score(self, line: str) -> LineScore:
        return score_line(
            line, self.profile, Domain.LEGAL,
            legal_cap=self.config.legal_score_cap,
        )


class LinguisticStrategy(DomainStrategy):
    domain = Domain.LINGUISTIC

    def score(self, line: str) -> LineScore:
        return score_line(line, self.profile, Domain.LINGUISTIC)


_STRATEGIES: dict[Domain, type[DomainStrategy]] = {
    Domain.LEGAL: LegalStrategy,
    Domain.LINGUISTIC: LinguisticStrategy,
}


def strategy_for(
    domain: Domain,
    profile: LanguageProfile = LanguageProfile.GENERIC,
    config: ParserConfig = DEFAULT_CONFIG,
) -> DomainStrategy:
    return _STRATEGIES[domain](profile, config)
