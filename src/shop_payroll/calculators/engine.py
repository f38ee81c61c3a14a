"""Hours and pay calculation engine.

Pure computation over plain data: no storage access, no clock access
other than the injectable ``now`` used for open shifts.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from shop_payroll.calculators.types import (
    ZERO,
    AttendanceSummary,
    EmployeeReport,
    EntryBucket,
    HoursBreakdown,
    PayBreakdown,
    PayRules,
    ReportPeriod,
    TimeEntryInput,
)
from shop_payroll.errors import ConfigurationError

HOURS_QUANTUM = Decimal("0.0001")
CENTS = Decimal("0.01")
SECONDS_PER_HOUR = Decimal("3600")

_CLOCK_TIME_RE = re.compile(r"^([0-1][0-9]|2[0-3]):([0-5][0-9])$")


def parse_clock_time(value: str) -> time:
    """Parse an ``HH:mm`` settings string.

    Raises:
        ConfigurationError: If the string is not a valid 24h clock time
    """
    match = _CLOCK_TIME_RE.match(value or "")
    if match is None:
        raise ConfigurationError(f"Invalid time format {value!r}. Use HH:mm")
    return time(int(match.group(1)), int(match.group(2)))


def standard_hours(rules: PayRules) -> Decimal:
    """Length of the configured work day in hours (time-of-day only)."""
    start = parse_clock_time(rules.work_day_start_time)
    end = parse_clock_time(rules.work_day_end_time)
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    if minutes <= 0:
        raise ConfigurationError(
            f"Work day end {rules.work_day_end_time} must be after "
            f"start {rules.work_day_start_time}"
        )
    return (Decimal(minutes) / 60).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Exact elapsed hours, quantized to 4 places."""
    delta = end - start
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / 1_000_000
    return (seconds / SECONDS_PER_HOUR).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


class PayrollEngine:
    """Converts one employee's time entries into an hours/pay breakdown.

    Classification per entry, by the calendar date of clock-in only:
    1) Saturday/Sunday -> weekend hours
    2) listed holiday -> holiday hours
    3) otherwise -> regular hours up to the standard day, rest overtime

    Weekend and holiday hours are never split into overtime. A shift that
    runs past midnight stays in the bucket of the day it started.
    """

    def __init__(self, rules: PayRules, now: datetime | None = None):
        self.rules = rules
        self.now = now
        self.standard_hours = standard_hours(rules)
        self.work_day_start = parse_clock_time(rules.work_day_start_time)
        self._holiday_dates = rules.holiday_dates

    def classify_entry(self, clock_in: datetime) -> EntryBucket:
        """Pick the single bucket an entry's hours go to."""
        if clock_in.weekday() >= 5:
            return EntryBucket.WEEKEND
        if clock_in.date().isoformat() in self._holiday_dates:
            return EntryBucket.HOLIDAY
        return EntryBucket.REGULAR

    def entry_hours(self, entry: TimeEntryInput) -> Decimal:
        """Hours worked by one entry; open entries run until ``now``."""
        clock_out = entry.clock_out or self._resolve_now()
        hours = hours_between(entry.clock_in, clock_out)
        # An open entry evaluated before its clock-in contributes nothing
        return max(hours, ZERO)

    def compute_hours(self, entries: Iterable[TimeEntryInput]) -> HoursBreakdown:
        """Partition worked time into regular/overtime/weekend/holiday hours."""
        hours = HoursBreakdown()

        for entry in entries:
            worked = self.entry_hours(entry)
            bucket = self.classify_entry(entry.clock_in)

            if bucket is EntryBucket.WEEKEND:
                hours.weekend_hours += worked
            elif bucket is EntryBucket.HOLIDAY:
                hours.holiday_hours += worked
            elif worked > self.standard_hours:
                hours.regular_hours += self.standard_hours
                hours.overtime_hours += worked - self.standard_hours
            else:
                hours.regular_hours += worked

        return hours

    def compute_pay(self, hours: HoursBreakdown, hourly_rate: Decimal) -> PayBreakdown:
        """Apply the hourly rate and bucket multipliers. Amounts in cents."""
        rate = Decimal(hourly_rate)
        return PayBreakdown(
            regular_pay=to_cents(hours.regular_hours * rate),
            overtime_pay=to_cents(hours.overtime_hours * rate * self.rules.overtime_rate),
            weekend_pay=to_cents(hours.weekend_hours * rate * self.rules.weekend_rate),
            holiday_pay=to_cents(hours.holiday_hours * rate * self.rules.holiday_rate),
        )

    def compute_attendance(
        self,
        entries: Iterable[TimeEntryInput],
        start_date: date,
        end_date: date,
    ) -> AttendanceSummary:
        """Count present days, absent days and late arrivals in a period."""
        entries = list(entries)
        days_present = len({e.clock_in.date() for e in entries})
        total_days = ReportPeriod(start_date, end_date).total_days
        late_arrivals = sum(
            1 for e in entries if e.clock_in.time() > self.work_day_start
        )
        return AttendanceSummary(
            days_present=days_present,
            days_absent=max(0, total_days - days_present),
            late_arrivals=late_arrivals,
        )

    def build_employee_report(
        self,
        employee_id: UUID,
        name: str,
        hourly_rate: Decimal,
        entries: Iterable[TimeEntryInput],
        start_date: date,
        end_date: date,
    ) -> EmployeeReport:
        """Full report row for one employee."""
        entries = list(entries)
        hours = self.compute_hours(entries)
        pay = self.compute_pay(hours, hourly_rate)
        attendance = self.compute_attendance(entries, start_date, end_date)
        return EmployeeReport.from_parts(employee_id, name, hours, pay, attendance)

    def _resolve_now(self) -> datetime:
        if self.now is None:
            self.now = datetime.now()
        return self.now
