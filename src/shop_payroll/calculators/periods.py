"""Recurring payroll period windows."""

from __future__ import annotations

import calendar
from datetime import date

from shop_payroll.calculators.types import ReportPeriod


def _clamped(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the month's last day."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def payroll_period_containing(day: date, start_day: int, end_day: int) -> ReportPeriod:
    """Return the payroll period that contains ``day``.

    With ``start_day <= end_day`` a period lies inside one calendar month
    (e.g. 1 -> 31); a day falling between two such periods gets the
    next one. Otherwise it crosses into the next month
    (e.g. 25 -> 24). Days past a month's end clamp to its last day.

    Raises:
        ValueError: If a day-of-month is outside 1..31
    """
    for value in (start_day, end_day):
        if not 1 <= value <= 31:
            raise ValueError(f"Payroll day must be between 1 and 31, got {value}")

    if start_day <= end_day:
        end = _clamped(day.year, day.month, end_day)
        if day > end:
            year, month = _shift_month(day.year, day.month, 1)
            return ReportPeriod(_clamped(year, month, start_day), _clamped(year, month, end_day))
        return ReportPeriod(_clamped(day.year, day.month, start_day), end)

    this_month_start = _clamped(day.year, day.month, start_day)
    if day >= this_month_start:
        year, month = _shift_month(day.year, day.month, 1)
        return ReportPeriod(this_month_start, _clamped(year, month, end_day))

    year, month = _shift_month(day.year, day.month, -1)
    return ReportPeriod(_clamped(year, month, start_day), _clamped(day.year, day.month, end_day))
