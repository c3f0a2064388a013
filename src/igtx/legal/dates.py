"""Date extraction and keyword-based date typing.

Three surface forms are recognized:

    MM/DD/YYYY          01/05/2020
    Month DD, YYYY      January 5, 2020   (comma optional, any case)
    YYYY-MM-DD          2020-01-05

Each candidate is validated by building a real calendar date; candidates
that fail (13/45/2020, February 30, 2020) are kept aside as rejected
text instead of being guessed at.
"""
from __future__ import annotations

import datetime
import re
from collections.abc import Callable
from dataclasses import dataclass

from igtx.legal.types import DateType, ExtractedDate, TextSpan
from igtx.textmatch import context_window

DEFAULT_CONTEXT_RADIUS = 50

MONTHS: tuple[str, ...] = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

RE_US_DATE: re.Pattern[str] = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")
RE_LONG_DATE: re.Pattern[str] = re.compile(
    r"\b(" + "|".join(MONTHS) + r")\s+(\d{1,2}),?\s+(\d{4})\b",
    re.IGNORECASE,
)
RE_ISO_DATE: re.Pattern[str] = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")

# Keyword buckets in priority order; the first bucket with a hit wins.
DATE_TYPE_KEYWORDS: tuple[tuple[DateType, tuple[str, ...]], ...] = (
    ("jurat", ("sworn", "notary", "subscribed", "jurat")),
    ("filing", ("filed", "filing", "dated:")),
    ("signature", ("signed", "signature", "executed")),
    ("service", ("served", "service", "mail")),
    ("hearing", ("hearing", "appearance", "returnable")),
)


def _us(m: re.Match[str]) -> datetime.date:
    return datetime.date(int(m.group(3)), int(m.group(1)), int(m.group(2)))


def _long(m: re.Match[str]) -> datetime.date:
    month = MONTHS.index(m.group(1).lower()) + 1
    return datetime.date(int(m.group(3)), month, int(m.group(2)))


def _iso(m: re.Match[str]) -> datetime.date:
    return datetime.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


DATE_FORMS: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], datetime.date]], ...] = (
    (RE_US_DATE, _us),
    (RE_LONG_DATE, _long),
    (RE_ISO_DATE, _iso),
)


@dataclass(frozen=True, slots=True)
class DateExtraction:
    dates: tuple[ExtractedDate, ...]        # ascending by date
    rejected: tuple[str, ...]               # matched text that is not a real date


def classify_date_context(context: str) -> DateType:
    lower = context.lower()
    for date_type, keywords in DATE_TYPE_KEYWORDS:
        if any(k in lower for k in keywords):
            return date_type
    return "reference"


def parse_us_date(text: str) -> datetime.date | None:
    """Parse ``MM/DD/YYYY``; None when the text is not a valid calendar date."""
    m = RE_US_DATE.fullmatch(text.strip())
    if m is None:
        return None
    try:
        return _us(m)
    except ValueError:
        return None


class DateExtractor:
    def __init__(self, context_radius: int = DEFAULT_CONTEXT_RADIUS) -> None:
        self.context_radius = context_radius

    def extract_all(self, text: str) -> DateExtraction:
        found: list[ExtractedDate] = []
        rejected: list[str] = []
        for pattern, build in DATE_FORMS:
            for m in pattern.finditer(text):
                try:
                    value = build(m)
                except ValueError:
                    rejected.append(m.group(0))
                    continue
                context = context_window(
                    text, m.start(), m.end(), self.context_radius,
                    collapse_whitespace=True,
                )
                found.append(ExtractedDate(
                    date=value,
                    text=m.group(0),
                    context=context,
                    type=classify_date_context(context),
                    location=TextSpan(m.start(), m.end()),
                ))
        # Stable: equal dates keep extraction order.
        found.sort(key=lambda d: d.date)
        return DateExtraction(tuple(found), tuple(rejected))

    def extract(self, text: str) -> list[ExtractedDate]:
        return list(self.extract_all(text).dates)
