"""Tests for igtx.normalization and igtx.domain_strategy."""
from __future__ import annotations

from igtx.config import ParserConfig
from igtx.confidence import LineScore
from igtx.domain_strategy import LegalStrategy, LinguisticStrategy, strategy_for
from igtx.normalization import normalize_text
from igtx.profiles import Domain, LanguageProfile

E_ACUTE = chr(0xE9)


class TestNormalizeText:
    def test_nfc(self) -> None:
        out = normalize_text("e" + chr(0x301))
        assert out.text == E_ACUTE
        assert out.normalization_flags["nfc_changed"] is True

    def test_already_nfc(self) -> None:
        out = normalize_text(E_ACUTE)
        assert out.normalization_flags == {"nfc_changed": False, "crlf_present": False}

    def test_split_on_lf_and_crlf(self) -> None:
        out = normalize_text("a\r\nb\nc")
        assert out.lines == ("a", "b", "c")
        assert out.normalization_flags["crlf_present"] is True

    def test_lone_cr_is_not_a_break(self) -> None:
        assert normalize_text("a\rb").lines == ("a\rb",)

    def test_none(self) -> None:
        out = normalize_text(None)
        assert out.text == ""
        assert out.lines == ("",)


class TestStrategies:
    def test_factory(self) -> None:
        assert isinstance(strategy_for(Domain.LEGAL), LegalStrategy)
        assert isinstance(strategy_for(Domain.LINGUISTIC), LinguisticStrategy)

    def test_thresholds_from_config(self) -> None:
        config = ParserConfig(legal_threshold=0.6)
        assert strategy_for(Domain.LEGAL, config=config).threshold == 0.6
        assert strategy_for(Domain.LINGUISTIC).threshold == 0.45

    def test_retains_at_threshold(self) -> None:
        strategy = strategy_for(Domain.LEGAL)
        assert strategy.retains(LineScore(0.35, ()))
        assert not strategy.retains(LineScore(0.34, ()))

    def test_legal_cap_from_config(self) -> None:
        config = ParserConfig(legal_score_cap=0.9)
        line = "WHEREFORE, Smith v. Jones"
        assert strategy_for(Domain.LEGAL, config=config).score(line).score == 0.9

    def test_profile_passed_through(self) -> None:
        strategy = strategy_for(Domain.LINGUISTIC, LanguageProfile.POLYSYNTHETIC)
        assert strategy.score("1SG-go=PST").score == 0.5

    def test_classify_uses_domain(self) -> None:
        text = "WHEREFORE, plaintiff demands judgment"
        assert strategy_for(Domain.LEGAL).classify(text).clause_type == "chain_clause"
        assert strategy_for(Domain.LINGUISTIC).classify(text).clause_type == "simple"
