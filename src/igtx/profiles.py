"""Domains, language profiles and the static ISO-639-3 profile table.

The profile only tunes linguistic heuristics; there is no language
detection. An unset profile is resolved from the source language code,
and anything not in the table falls back to ``generic``.
"""
from __future__ import annotations

from enum import StrEnum


class Domain(StrEnum):
    LEGAL = "legal"
    LINGUISTIC = "linguistic"


class LanguageProfile(StrEnum):
    GENERIC = "generic"
    POLYSYNTHETIC = "polysynthetic"
    ANALYTIC = "analytic"
    MORPHOLOGICAL_DENSE = "morphological_dense"


# ISO-639-3 code -> profile. Grouped by the morphology the heuristics care
# about, not by genealogy.
ISO_639_3_PROFILES: dict[str, LanguageProfile] = {
    # Eskimo-Aleut, Iroquoian, Algonquian, Wakashan, Ainu
    "iku": LanguageProfile.POLYSYNTHETIC,
    "ike": LanguageProfile.POLYSYNTHETIC,
    "kal": LanguageProfile.POLYSYNTHETIC,
    "esu": LanguageProfile.POLYSYNTHETIC,
    "ess": LanguageProfile.POLYSYNTHETIC,
    "moh": LanguageProfile.POLYSYNTHETIC,
    "sel": LanguageProfile.POLYSYNTHETIC,
    "chr": LanguageProfile.POLYSYNTHETIC,
    "crk": LanguageProfile.POLYSYNTHETIC,
    "ojg": LanguageProfile.POLYSYNTHETIC,
    "kwk": LanguageProfile.POLYSYNTHETIC,
    "nuk": LanguageProfile.POLYSYNTHETIC,
    "ain": LanguageProfile.POLYSYNTHETIC,
    # Athabaskan, Salishan, Mayan, Tlingit, Haida
    "nav": LanguageProfile.MORPHOLOGICAL_DENSE,
    "apw": LanguageProfile.MORPHOLOGICAL_DENSE,
    "chp": LanguageProfile.MORPHOLOGICAL_DENSE,
    "scs": LanguageProfile.MORPHOLOGICAL_DENSE,
    "tli": LanguageProfile.MORPHOLOGICAL_DENSE,
    "hai": LanguageProfile.MORPHOLOGICAL_DENSE,
    "lut": LanguageProfile.MORPHOLOGICAL_DENSE,
    "squ": LanguageProfile.MORPHOLOGICAL_DENSE,
    "str": LanguageProfile.MORPHOLOGICAL_DENSE,
    "yua": LanguageProfile.MORPHOLOGICAL_DENSE,
    "quc": LanguageProfile.MORPHOLOGICAL_DENSE,
    "tzo": LanguageProfile.MORPHOLOGICAL_DENSE,
    # Isolating languages
    "cmn": LanguageProfile.ANALYTIC,
    "yue": LanguageProfile.ANALYTIC,
    "vie": LanguageProfile.ANALYTIC,
    "tha": LanguageProfile.ANALYTIC,
    "lao": LanguageProfile.ANALYTIC,
    "yor": LanguageProfile.ANALYTIC,
    "hmn": LanguageProfile.ANALYTIC,
}


def resolve_profile(
    profile: LanguageProfile | str | None,
    language: str | None = None,
) -> LanguageProfile:
    """Return the explicit profile, else the table entry for *language*.

    Raises ValueError for a profile string that is not a known profile.
    """
    if profile:
        return LanguageProfile(profile)
    code = (language or "").strip().lower()
    return ISO_639_3_PROFILES.get(code, LanguageProfile.GENERIC)


def resolve_domain(domain: Domain | str) -> Domain:
    """Coerce *domain*; raises ValueError for anything but legal/linguistic."""
    return Domain(domain)
