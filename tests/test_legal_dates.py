"""Tests for igtx.legal.dates: surface forms, validation, keyword typing."""
from __future__ import annotations

import datetime

import pytest

from igtx.legal.dates import (
    DateExtractor,
    classify_date_context,
    parse_us_date,
)

JAN_5 = datetime.date(2020, 1, 5)


class TestSurfaceForms:
    @pytest.mark.parametrize("text", [
        "on 01/05/2020 here",
        "on 1/5/2020 here",
        "on January 5, 2020 here",
        "on january 5 2020 here",
        "on JANUARY 05, 2020 here",
        "on 2020-01-05 here",
    ])
    def test_recognized(self, text: str) -> None:
        dates = DateExtractor().extract(text)
        assert [d.date for d in dates] == [JAN_5]

    def test_location_and_text(self) -> None:
        text = "Served on 01/05/2020."
        (found,) = DateExtractor().extract(text)
        assert found.text == "01/05/2020"
        assert text[found.location.start:found.location.end] == "01/05/2020"

    def test_sorted_ascending(self) -> None:
        text = "first 2020-03-01 then 01/02/2020 and finally June 1, 2019"
        dates = DateExtractor().extract(text)
        assert [d.date.isoformat() for d in dates] == ["2019-06-01", "2020-01-02", "2020-03-01"]

    def test_no_dates(self) -> None:
        assert DateExtractor().extract("nothing to see") == []


class TestValidation:
    def test_invalid_dates_rejected_not_guessed(self) -> None:
        result = DateExtractor().extract_all("Dated 13/45/2020 and February 30, 2020")
        assert result.dates == ()
        assert result.rejected == ("13/45/2020", "February 30, 2020")

    def test_leap_day(self) -> None:
        result = DateExtractor().extract_all("on 02/29/2020 and 02/29/2021")
        assert [d.date for d in result.dates] == [datetime.date(2020, 2, 29)]
        assert result.rejected == ("02/29/2021",)

    def test_parse_us_date(self) -> None:
        assert parse_us_date(" 03/04/2021 ") == datetime.date(2021, 3, 4)
        assert parse_us_date("13/45/2020") is None
        assert parse_us_date("March 4, 2021") is None


class TestDateTyping:
    @pytest.mark.parametrize(("context", "expected"), [
        ("Sworn to before me on", "jurat"),
        ("Notary Public", "jurat"),
        ("Filed with the clerk", "filing"),
        ("Dated: ", "filing"),
        ("Executed by the tenant", "signature"),
        ("Served by first class mail", "service"),
        ("Motion returnable on", "hearing"),
        ("The lease began on", "reference"),
    ])
    def test_buckets(self, context: str, expected: str) -> None:
        assert classify_date_context(context) == expected

    def test_priority_order(self) -> None:
        assert classify_date_context("sworn and filed") == "jurat"
        assert classify_date_context("signed and served") == "signature"

    def test_context_is_collapsed_window(self) -> None:
        text = "x" * 80 + "\n\nSworn   on 01/05/2020\tnow" + "y" * 80
        (found,) = DateExtractor().extract(text)
        assert found.type == "jurat"
        assert "\n" not in found.context
        assert "Sworn on 01/05/2020 now" in found.context
        assert len(found.context) <= 50 * 2 + len("01/05/2020")

    def test_radius_limits_keywords(self) -> None:
        text = "Filed " + "." * 60 + " on 01/05/2020"
        assert DateExtractor().extract(text)[0].type == "reference"
        assert DateExtractor(context_radius=80).extract(text)[0].type == "filing"
