"""Tests for igtx.legal.constraints: temporal consistency over typed dates."""
from __future__ import annotations

import datetime

from igtx.legal.constraints import CONSTRAINTS, ConstraintChecker
from igtx.legal.types import DateType, ExtractedDate, TextSpan


def dated(iso: str, date_type: DateType) -> ExtractedDate:
    return ExtractedDate(
        date=datetime.date.fromisoformat(iso),
        text=iso,
        context="",
        type=date_type,
        location=TextSpan(0, len(iso)),
    )


def ids(violations: list) -> list[str]:
    return [v.constraint_id for v in violations]


class TestFilingOrder:
    def test_jurat_after_filing_is_critical(self) -> None:
        jurat = dated("2020-01-05", "jurat")
        filing = dated("2020-01-01", "filing")
        (violation,) = ConstraintChecker().check([filing, jurat])
        assert violation.constraint_id == "jurat_before_filing"
        assert violation.severity == "critical"
        assert violation.dates == (jurat, filing)

    def test_jurat_same_day_as_filing_is_fine(self) -> None:
        dates = [dated("2020-01-01", "jurat"), dated("2020-01-01", "filing")]
        assert ConstraintChecker().check(dates) == []

    def test_signature_after_filing(self) -> None:
        dates = [dated("2020-01-01", "filing"), dated("2020-02-01", "signature")]
        (violation,) = ConstraintChecker().check(dates)
        assert violation.constraint_id == "signature_before_filing"
        assert violation.severity == "critical"


class TestNotice:
    def test_short_notice_is_high(self) -> None:
        service = dated("2020-01-01", "service")
        hearing = dated("2020-01-05", "hearing")
        (violation,) = ConstraintChecker().check([service, hearing])
        assert violation.constraint_id == "service_before_hearing"
        assert violation.severity == "high"
        assert violation.dates == (service, hearing)
        assert "4 days" in violation.description

    def test_ten_days_is_enough(self) -> None:
        dates = [dated("2020-01-01", "service"), dated("2020-01-11", "hearing")]
        assert ConstraintChecker().check(dates) == []

    def test_exactly_min_notice_is_enough(self) -> None:
        dates = [dated("2020-01-01", "service"), dated("2020-01-08", "hearing")]
        assert ConstraintChecker().check(dates) == []

    def test_same_day_service_is_short_notice(self) -> None:
        dates = [dated("2020-01-01", "service"), dated("2020-01-01", "hearing")]
        assert ids(ConstraintChecker().check(dates)) == ["service_before_hearing"]

    def test_min_notice_configurable(self) -> None:
        dates = [dated("2020-01-01", "service"), dated("2020-01-05", "hearing")]
        assert ConstraintChecker(min_notice_days=3).check(dates) == []

    def test_hearing_before_service_is_critical(self) -> None:
        dates = [dated("2020-01-01", "hearing"), dated("2020-01-05", "service")]
        (violation,) = ConstraintChecker().check(dates)
        assert violation.constraint_id == "hearing_before_service"
        assert violation.severity == "critical"


class TestReferenceDate:
    def test_skipped_without_reference_date(self) -> None:
        assert ConstraintChecker().check([dated("2099-01-01", "jurat")]) == []

    def test_one_day_tolerance(self) -> None:
        checker = ConstraintChecker()
        ref = datetime.date(2020, 1, 5)
        assert checker.check([dated("2020-01-06", "jurat")], reference_date=ref) == []
        late = checker.check([dated("2020-01-07", "jurat")], reference_date=ref)
        assert ids(late) == ["jurat_after_reference_date"]
        assert late[0].severity == "critical"

    def test_only_jurats_are_bounded(self) -> None:
        ref = datetime.date(2020, 1, 5)
        dates = [dated("2021-01-01", "reference")]
        assert ConstraintChecker().check(dates, reference_date=ref) == []


class TestReporting:
    def test_first_violating_pair_only(self) -> None:
        # Known limitation: two late jurats still yield one entry.
        filing = dated("2020-01-01", "filing")
        first = dated("2020-01-05", "jurat")
        second = dated("2020-01-09", "jurat")
        violations = ConstraintChecker().check([filing, first, second])
        assert ids(violations) == ["jurat_before_filing"]
        assert violations[0].dates == (first, filing)

    def test_evaluation_order(self) -> None:
        dates = [
            dated("2020-01-01", "filing"),
            dated("2020-01-02", "jurat"),
            dated("2020-01-03", "signature"),
            dated("2020-01-04", "service"),
            dated("2020-01-06", "hearing"),
        ]
        assert ids(ConstraintChecker().check(dates)) == [
            "jurat_before_filing", "signature_before_filing", "service_before_hearing",
        ]

    def test_custom_constraint_subset(self) -> None:
        dates = [dated("2020-01-01", "filing"), dated("2020-01-02", "signature")]
        assert ConstraintChecker(CONSTRAINTS[:1]).check(dates) == []

    def test_untyped_dates_never_violate(self) -> None:
        dates = [dated("2020-01-01", "reference"), dated("1990-01-01", "reference")]
        assert ConstraintChecker().check(dates) == []
