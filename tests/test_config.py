"""Tests for igtx.config and igtx.profiles."""
from __future__ import annotations

from pathlib import Path

import pytest

from igtx.config import DEFAULT_CONFIG, ConfigError, ParserConfig
from igtx.profiles import (
    ISO_639_3_PROFILES,
    Domain,
    LanguageProfile,
    resolve_domain,
    resolve_profile,
)


class TestParserConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.legal_threshold == 0.35
        assert DEFAULT_CONFIG.linguistic_threshold == 0.45
        assert DEFAULT_CONFIG.min_notice_days == 7
        assert DEFAULT_CONFIG.enrichment_batch_size == 5

    def test_threshold_for(self) -> None:
        assert DEFAULT_CONFIG.threshold_for(Domain.LEGAL) == 0.35
        assert DEFAULT_CONFIG.threshold_for(Domain.LINGUISTIC) == 0.45

    def test_from_dict_overrides(self) -> None:
        config = ParserConfig.from_dict({"legal_threshold": 0.4, "min_notice_days": 8})
        assert config.legal_threshold == 0.4
        assert config.min_notice_days == 8
        assert isinstance(config.min_notice_days, int)
        assert config.linguistic_threshold == 0.45

    def test_int_accepted_for_float_field(self) -> None:
        config = ParserConfig.from_dict({"tier_cap": 1})
        assert config.tier_cap == 1.0
        assert isinstance(config.tier_cap, float)

    @pytest.mark.parametrize("payload", [
        {"no_such_key": 1},
        {"legal_threshold": "high"},
        {"min_notice_days": True},
        {"min_notice_days": 7.5},
        {"enrichment_batch_size": 0},
    ])
    def test_from_dict_errors(self, payload: dict) -> None:
        with pytest.raises(ConfigError):
            ParserConfig.from_dict(payload)

    def test_from_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text('{"signature_lookahead": 300}')
        assert ParserConfig.from_json(path).signature_lookahead == 300

    def test_from_json_not_object(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            ParserConfig.from_json(path)

    def test_from_json_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            ParserConfig.from_json(tmp_path / "absent.json")


class TestProfiles:
    def test_explicit_profile(self) -> None:
        assert resolve_profile("polysynthetic") is LanguageProfile.POLYSYNTHETIC

    def test_explicit_beats_language(self) -> None:
        assert resolve_profile(LanguageProfile.ANALYTIC, "nav") is LanguageProfile.ANALYTIC

    @pytest.mark.parametrize(("code", "expected"), [
        ("nav", LanguageProfile.MORPHOLOGICAL_DENSE),
        ("IKU", LanguageProfile.POLYSYNTHETIC),
        ("cmn", LanguageProfile.ANALYTIC),
        ("eng", LanguageProfile.GENERIC),
        (None, LanguageProfile.GENERIC),
    ])
    def test_language_table(self, code: str | None, expected: LanguageProfile) -> None:
        assert resolve_profile(None, code) is expected

    def test_unknown_profile(self) -> None:
        with pytest.raises(ValueError):
            resolve_profile("klingon")

    def test_table_codes_are_lowercase_iso3(self) -> None:
        assert all(len(c) == 3 and c.islower() for c in ISO_639_3_PROFILES)

    def test_domains(self) -> None:
        assert resolve_domain("legal") is Domain.LEGAL
        with pytest.raises(ValueError):
            resolve_domain("medical")
