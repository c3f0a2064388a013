"""Tests for igtx.tier_assessment: weighted document-level detectors."""
from __future__ import annotations

from igtx.config import ParserConfig
from igtx.parsing_types import PdfTextDiagnostics
from igtx.profiles import Domain
from igtx.tier_assessment import RECOMMENDED_ACTIONS, assess_tier

CAPTION_TEXT = "SUPREME COURT OF THE STATE OF NEW YORK\nIndex No: 12345/2024\nSmith v. Jones\n"


def diagnostics(ratio: float) -> PdfTextDiagnostics:
    return PdfTextDiagnostics(
        total_lines=100,
        fragmented_line_ratio=ratio,
        avg_line_length=40.0,
        hyphen_break_count=0,
        is_ocr=False,
    )


class TestLegalTier:
    def test_caption_docket_adversarial_requires_special_handling(self) -> None:
        tier = assess_tier(CAPTION_TEXT, Domain.LEGAL)
        assert tier.requires_special_handling is True
        assert tier.confidence == 0.99
        assert {s.feature for s in tier.signals} == {
            "docket_index", "adversarial_caption", "court_caption",
        }
        assert tier.recommended_action == RECOMMENDED_ACTIONS[Domain.LEGAL][0]

    def test_signals_carry_full_weight(self) -> None:
        tier = assess_tier("Index No: 12345/2024", Domain.LEGAL)
        assert [(s.feature, s.weight) for s in tier.signals] == [("docket_index", 0.4)]
        assert tier.confidence == 0.4
        assert tier.requires_special_handling is True

    def test_adversarial_alone_is_below_trigger(self) -> None:
        tier = assess_tier("Smith v. Jones", Domain.LEGAL)
        assert tier.confidence == 0.3
        assert tier.requires_special_handling is False
        assert tier.recommended_action == RECOMMENDED_ACTIONS[Domain.LEGAL][1]

    def test_contract_header(self) -> None:
        tier = assess_tier("RESIDENTIAL LEASE AGREEMENT\nThe parties agree.", Domain.LEGAL)
        assert [s.feature for s in tier.signals] == ["contract_header"]
        assert tier.confidence == 0.5

    def test_plain_text(self) -> None:
        tier = assess_tier("The weather is nice today.", Domain.LEGAL)
        assert tier.signals == ()
        assert tier.confidence == 0.0
        assert tier.requires_special_handling is False


class TestLayoutSignal:
    def test_fragmentation_adds_020(self) -> None:
        tier = assess_tier("plain text", Domain.LEGAL, diagnostics(0.5))
        assert [(s.feature, s.weight) for s in tier.signals] == [("layout_structure", 0.2)]
        assert tier.requires_special_handling is False

    def test_fragmentation_threshold_is_strict(self) -> None:
        tier = assess_tier("plain text", Domain.LINGUISTIC, diagnostics(0.3))
        assert tier.signals == ()

    def test_fragmentation_combines_with_domain_signals(self) -> None:
        tier = assess_tier("Smith v. Jones", Domain.LEGAL, diagnostics(0.6))
        assert tier.confidence == 0.5
        assert tier.requires_special_handling is True


class TestLinguisticTier:
    def test_complex_graphemes(self) -> None:
        ogonek = chr(0x105)
        text = " ".join([ogonek * 3] * 4)
        tier = assess_tier(text, Domain.LINGUISTIC)
        features = {s.feature for s in tier.signals}
        assert "orthographic_complexity" in features
        assert "script_distribution" not in features
        assert tier.requires_special_handling is True
        assert tier.recommended_action == RECOMMENDED_ACTIONS[Domain.LINGUISTIC][0]

    def test_five_complex_graphemes_do_not_fire(self) -> None:
        text = "abc " + chr(0x105) * 5 + " " + "latin " * 50
        tier = assess_tier(text, Domain.LINGUISTIC)
        assert "orthographic_complexity" not in {s.feature for s in tier.signals}

    def test_non_latin_share(self) -> None:
        cyrillic = "".join(chr(c) for c in range(0x430, 0x438))
        tier = assess_tier(f"{cyrillic} {cyrillic} word", Domain.LINGUISTIC)
        assert [s.feature for s in tier.signals] == ["script_distribution"]
        assert tier.confidence == 0.3

    def test_accented_latin_is_not_foreign_script(self) -> None:
        tier = assess_tier("Zażółć gęślą jaźń", Domain.LINGUISTIC)
        assert tier.signals == ()
        assert tier.requires_special_handling is False

    def test_latin_extended_orthography(self) -> None:
        # Navajo nasal vowels: o with ogonek and acute, e with ogonek
        word = "h" + chr(0x01EB) + chr(0x301) + "d" + chr(0x0119) + "e"
        tier = assess_tier(f"{word} {word}", Domain.LINGUISTIC)
        assert "script_distribution" not in {s.feature for s in tier.signals}

    def test_long_word_share(self) -> None:
        words = ["short"] * 19 + ["a" * 19]
        tier = assess_tier(" ".join(words), Domain.LINGUISTIC)
        assert [(s.feature, s.weight) for s in tier.signals] == [("morpheme_density", 0.3)]

    def test_long_word_share_below_five_percent(self) -> None:
        words = ["short"] * 21 + ["a" * 19]
        tier = assess_tier(" ".join(words), Domain.LINGUISTIC)
        assert tier.signals == ()

    def test_plain_english(self) -> None:
        tier = assess_tier("The dog runs home.", Domain.LINGUISTIC)
        assert tier.confidence == 0.0
        assert tier.recommended_action == "Proceed with 'generic'"


class TestConfig:
    def test_trigger_from_config(self) -> None:
        config = ParserConfig(tier_trigger=0.3)
        tier = assess_tier("Smith v. Jones", Domain.LEGAL, config=config)
        assert tier.requires_special_handling is True

    def test_cap_from_config(self) -> None:
        config = ParserConfig(tier_cap=0.8)
        tier = assess_tier(CAPTION_TEXT, Domain.LEGAL, config=config)
        assert tier.confidence == 0.8
