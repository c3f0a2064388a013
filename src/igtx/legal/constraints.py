"""Declarative temporal-consistency constraints over extracted dates.

Each constraint is a named predicate over the full date list that returns
at most one :class:`Violation`. Pairs are scanned in a fixed nested order
and the scan stops at the first violating pair, so a document with three
late jurats still yields a single ``jurat_before_filing`` entry.

Constraints, in evaluation order:

    jurat_before_filing          critical  jurat dated after a filing
    signature_before_filing      critical  signature dated after a filing
    service_before_hearing       high      service-to-hearing gap in [0, min_notice_days)
    hearing_before_service       critical  hearing dated before service
    jurat_after_reference_date   critical  jurat more than a day after the reference date
"""
from __future__ import annotations

import datetime
from collections.abc import Callable
from dataclasses import dataclass

from igtx.legal.types import DateType, ExtractedDate, Severity, Violation

DEFAULT_MIN_NOTICE_DAYS = 7
REFERENCE_DATE_TOLERANCE = datetime.timedelta(days=1)


@dataclass(frozen=True, slots=True)
class CheckContext:
    """Inputs every constraint may read besides the dates themselves."""

    min_notice_days: int = DEFAULT_MIN_NOTICE_DAYS
    reference_date: datetime.date | None = None


@dataclass(frozen=True, slots=True)
class Constraint:
    id: str
    severity: Severity
    description: str
    check: Callable[[Constraint, list[ExtractedDate], CheckContext], Violation | None]

    def evaluate(self, dates: list[ExtractedDate], ctx: CheckContext) -> Violation | None:
        return self.check(self, dates, ctx)

    def violation(self, description: str, *dates: ExtractedDate) -> Violation:
        return Violation(
            constraint_id=self.id,
            severity=self.severity,
            description=description,
            dates=dates,
        )


def _of_type(dates: list[ExtractedDate], date_type: DateType) -> list[ExtractedDate]:
    return [d for d in dates if d.type == date_type]


def _jurat_before_filing(
    c: Constraint, dates: list[ExtractedDate], _ctx: CheckContext,
) -> Violation | None:
    for jurat in _of_type(dates, "jurat"):
        for filing in _of_type(dates, "filing"):
            if jurat.date > filing.date:
                return c.violation(
                    f"Verification/jurat ({jurat.text}) is dated after the "
                    f"document was filed ({filing.text})",
                    jurat, filing,
                )
    return None


def _signature_before_filing(
    c: Constraint, dates: list[ExtractedDate], _ctx: CheckContext,
) -> Violation | None:
    for signature in _of_type(dates, "signature"):
        for filing in _of_type(dates, "filing"):
            if signature.date > filing.date:
                return c.violation(
                    f"Document appears signed ({signature.text}) after it was "
                    f"filed ({filing.text})",
                    signature, filing,
                )
    return None


def _service_before_hearing(
    c: Constraint, dates: list[ExtractedDate], ctx: CheckContext,
) -> Violation | None:
    for hearing in _of_type(dates, "hearing"):
        for service in _of_type(dates, "service"):
            gap = (hearing.date - service.date).days
            if 0 <= gap < ctx.min_notice_days:
                return c.violation(
                    f"Insufficient notice: only {gap} days between service "
                    f"({service.text}) and hearing ({hearing.text}); "
                    f"at least {ctx.min_notice_days} expected",
                    service, hearing,
                )
    return None


def _hearing_before_service(
    c: Constraint, dates: list[ExtractedDate], _ctx: CheckContext,
) -> Violation | None:
    for hearing in _of_type(dates, "hearing"):
        for service in _of_type(dates, "service"):
            if hearing.date < service.date:
                return c.violation(
                    f"Hearing ({hearing.text}) is listed before the service "
                    f"date ({service.text})",
                    service, hearing,
                )
    return None


def _jurat_after_reference_date(
    c: Constraint, dates: list[ExtractedDate], ctx: CheckContext,
) -> Violation | None:
    if ctx.reference_date is None:
        return None
    limit = ctx.reference_date + REFERENCE_DATE_TOLERANCE
    for jurat in _of_type(dates, "jurat"):
        if jurat.date > limit:
            return c.violation(
                f"Jurat date {jurat.text} is after the reference date "
                f"{ctx.reference_date.isoformat()}; possible OCR error or backdating",
                jurat,
            )
    return None


CONSTRAINTS: tuple[Constraint, ...] = (
    Constraint(
        "jurat_before_filing", "critical",
        "Jurat (verification) date must not follow the filing date",
        _jurat_before_filing,
    ),
    Constraint(
        "signature_before_filing", "critical",
        "Signature date must not follow the filing date",
        _signature_before_filing,
    ),
    Constraint(
        "service_before_hearing", "high",
        "Service must precede the hearing by the minimum notice period",
        _service_before_hearing,
    ),
    Constraint(
        "hearing_before_service", "critical",
        "A hearing cannot be dated before service",
        _hearing_before_service,
    ),
    Constraint(
        "jurat_after_reference_date", "critical",
        "Jurat cannot be dated after the reference date",
        _jurat_after_reference_date,
    ),
)


class ConstraintChecker:
    def __init__(
        self,
        constraints: tuple[Constraint, ...] = CONSTRAINTS,
        *,
        min_notice_days: int = DEFAULT_MIN_NOTICE_DAYS,
    ) -> None:
        self.constraints = constraints
        self.min_notice_days = min_notice_days

    def check(
        self,
        dates: list[ExtractedDate],
        *,
        reference_date: datetime.date | None = None,
    ) -> list[Violation]:
        ctx = CheckContext(self.min_notice_days, reference_date)
        violations: list[Violation] = []
        for constraint in self.constraints:
            violation = constraint.evaluate(dates, ctx)
            if violation is not None:
                violations.append(violation)
        return violations
