"""Regex vocabulary shared by the scorer, classifier and tier assessor.

Legal patterns target pleadings and contracts (captions, docket numbers,
adversarial party lines). Linguistic patterns target interlinear glossed
text (native-script lines vs gloss and translation lines).

No logic here, only compiled patterns and closed word sets.
"""

from __future__ import annotations

import re

# ── Line cleanup ─────────────────────────────────────────────────────

# Leading example/paragraph enumerator: "12.", "(3)", "4a", "(12b)"
RE_ENUMERATOR_PREFIX: re.Pattern[str] = re.compile(r"^(\(?\d+[a-z]?\.?\)?)\s*")

# ── Legal patterns ───────────────────────────────────────────────────

LEGAL_KEYWORDS: tuple[str, ...] = (
    "WHEREFORE",
    "PLEASE TAKE NOTICE",
    "AFFIDAVIT",
    "SWORN TO",
    "ORDERED",
    "ADJUDGED",
    "DECREED",
)

RE_COURT_CAPTION: re.Pattern[str] = re.compile(
    r"\b(?:SUPREME|DISTRICT|CIVIL|CRIMINAL|FAMILY|HOUSING|COUNTY|CITY|SUPERIOR"
    r"|CIRCUIT|APPELLATE|BANKRUPTCY|SURROGATE'?S|MUNICIPAL|JUSTICE)\s+COURT\b"
    r"|\bCOURT\s+OF\s+(?:THE\s+)?(?:STATE|COMMON|CLAIMS|APPEALS|CHANCERY)\b",
    re.IGNORECASE,
)

RE_DOCKET_NUMBER: re.Pattern[str] = re.compile(
    r"\b(?:Index|Docket|Case|Calendar|File)\s*(?:No\.?|Number|#)\s*[:.]?\s*"
    r"[A-Z0-9][\w./-]*",
    re.IGNORECASE,
)

# "Smith v. Jones", "SMITH VS JONES", "-against-"
RE_ADVERSARIAL: re.Pattern[str] = re.compile(
    r"\bvs?\.(?=\s)|\bvs\b|\bagainst\b",
    re.IGNORECASE,
)

RE_RECITALS_OPENER: re.Pattern[str] = re.compile(
    r"^(?:WHEREAS\b|RECITALS\b|WITNESSETH\b|DEFINITIONS\b|NOW,?\s+THEREFORE\b"
    r"|THIS\s+(?:LEASE|AGREEMENT|CONTRACT)\b"
    r"|(?:ARTICLE|SECTION)\s+[IVXLC\d]+\.?\s*[-:.]?\s*DEFINITIONS\b)",
    re.IGNORECASE,
)

# Title line of a contract ("RESIDENTIAL LEASE AGREEMENT") or its
# opening sentence ("THIS AGREEMENT is made ...").
RE_CONTRACT_HEADER: re.Pattern[str] = re.compile(
    r"^[ \t]*(?:[A-Z][A-Z&,' ]{0,60}\s)?(?:AGREEMENT|CONTRACT|LEASE)[ \t]*$"
    r"|\bTHIS\s+(?:[A-Z][A-Za-z]*\s+){0,4}(?:AGREEMENT|CONTRACT|LEASE)\b"
    r"[^.\n]{0,40}?\b(?:is\s+)?(?:made|entered)\b",
    re.MULTILINE,
)

RE_PAGE_NUMBER: re.Pattern[str] = re.compile(r"^[0-9]{1,3}$")

# "410 U.S. 113", "5 US 137"
RE_CITATION: re.Pattern[str] = re.compile(r"\d+\s*U\.?S\.?\s*\d+|\bv\.(?=\s)")

# ── Linguistic patterns ──────────────────────────────────────────────

# Latin Extended-A/B, IPA, spacing modifiers, combining diacritics, Greek,
# Cyrillic, Hebrew, Arabic, Devanagari, Latin Extended Additional,
# Latin Extended-D, CJK/kana/hangul, click letters.
RE_STRONG_NATIVE_CHAR: re.Pattern[str] = re.compile(
    "["
    "\u00C0-\u024F"
    "\u0250-\u02AF"
    "\u02B0-\u02FF"
    "\u0300-\u036F"
    "\u0370-\u03FF"
    "\u0400-\u04FF"
    "\u0590-\u05FF"
    "\u0600-\u06FF"
    "\u0900-\u097F"
    "\u1E00-\u1EFF"
    "\u207F"
    "\uA720-\uA7FF"
    "\u3040-\u30FF"
    "\u3400-\u4DBF"
    "\u4E00-\u9FFF"
    "\uAC00-\uD7AF"
    "\u01C0-\u01C3\u2016"
    "]"
)

RE_MORPH_DENSE_MARKER: re.Pattern[str] = re.compile(
    "[\u2019\u0142\u0141\u012F\u0105\u0119\u01EB\u0173\u0144"
    "\u00E1\u00E9\u00ED\u00F3\u00FA\u0295\u02BE\u02BF\u0323]"
)

RE_GLOSS_CHAR: re.Pattern[str] = re.compile(r"[-=:\d\[\]<>]")

# Graphemes typical of Americanist orthographies; counted per document.
RE_COMPLEX_GRAPHEME: re.Pattern[str] = re.compile(
    "[\u0105\u0119\u012F\u01EB\u0173\u0142\u0141\u02BC\u2019\u0301"
    "\u019B\u03BB\u03C7\u0295\u0294\u02B7\u0259\u0161\u010D\u030C\u0313]"
)

RE_WORD_SPLIT: re.Pattern[str] = re.compile(r"[\s\-,.=]+")

FUNCTION_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "is", "are", "was", "were",
    "in", "on", "at", "to", "for", "of", "with", "by", "he", "she", "it", "they",
    "el", "la", "los", "las", "un", "una", "y", "o", "pero",
    "le", "les", "et", "ou", "est", "sont",
})

# ── Clause structure vocabulary ──────────────────────────────────────

AUXILIARY_VERBS: frozenset[str] = frozenset({
    "am", "is", "are", "was", "were", "be", "been", "being",
    "has", "have", "had", "do", "does", "did",
    "will", "would", "shall", "should", "can", "could", "may", "might", "must",
})

COORDINATORS: frozenset[str] = frozenset({
    "and", "but", "or", "nor", "so", "yet",
})

SUBORDINATORS: frozenset[str] = frozenset({
    "because", "although", "though", "since", "unless", "whereas", "while",
    "whether", "until", "after", "before", "once", "whenever", "wherever",
})

RELATIVE_PRONOUNS: frozenset[str] = frozenset({
    "who", "whom", "whose", "which", "that",
})

RE_CONDITIONAL_OPENER: re.Pattern[str] = re.compile(
    r"^(?:if|when|unless|provided(?:\s+that)?|in\s+the\s+event|in\s+case)\b",
    re.IGNORECASE,
)

RE_EMBEDDING_MARKER: re.Pattern[str] = re.compile(r"[(\[{]")

# ":" ";" "|" em dash, or a hyphen with whitespace on both sides
RE_STRONG_SEPARATOR: re.Pattern[str] = re.compile(r"[:;|—]|(?<=\s)-(?=\s)")

RE_TERMINAL_PUNCT: re.Pattern[str] = re.compile(r"[.?!][\"'”’)]*$")
