"""Type definitions for the hours and pay calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

ZERO = Decimal("0")


class EntryBucket(str, Enum):
    """Mutually exclusive classification of one shift."""

    REGULAR = "regular"  # split into regular and overtime hours
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


@dataclass(frozen=True)
class Holiday:
    """Public holiday paid at the holiday rate for the whole day."""

    date: str  # yyyy-MM-dd
    name: str


@dataclass(frozen=True)
class PayRules:
    """Pay configuration consumed by the engine."""

    work_day_start_time: str  # HH:mm
    work_day_end_time: str  # HH:mm
    overtime_rate: Decimal
    weekend_rate: Decimal
    holiday_rate: Decimal
    holidays: tuple[Holiday, ...] = ()
    payroll_start_day: int = 25
    payroll_end_day: int = 24

    @property
    def holiday_dates(self) -> frozenset[str]:
        return frozenset(h.date for h in self.holidays)


@dataclass(frozen=True)
class TimeEntryInput:
    """A shift as seen by the engine. clock_out is None while open."""

    employee_id: UUID
    clock_in: datetime
    clock_out: datetime | None = None
    time_entry_id: UUID | None = None


@dataclass
class HoursBreakdown:
    """Worked hours per bucket."""

    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    weekend_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO

    @property
    def total_hours(self) -> Decimal:
        return (
            self.regular_hours
            + self.overtime_hours
            + self.weekend_hours
            + self.holiday_hours
        )


@dataclass
class PayBreakdown:
    """Gross pay per bucket."""

    regular_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    weekend_pay: Decimal = ZERO
    holiday_pay: Decimal = ZERO

    @property
    def total_pay(self) -> Decimal:
        return self.regular_pay + self.overtime_pay + self.weekend_pay + self.holiday_pay


@dataclass
class AttendanceSummary:
    """Attendance counters for one employee over a report period."""

    days_present: int = 0
    days_absent: int = 0
    late_arrivals: int = 0


@dataclass
class ReportTotals:
    """Numeric report fields. Also the field-wise sum across employees."""

    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    weekend_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    total_hours: Decimal = ZERO
    regular_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    weekend_pay: Decimal = ZERO
    holiday_pay: Decimal = ZERO
    total_pay: Decimal = ZERO
    days_present: int = 0
    days_absent: int = 0
    late_arrivals: int = 0

    @classmethod
    def numeric_fields(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(ReportTotals))

    def add(self, other: ReportTotals) -> None:
        """Accumulate another record's numeric fields into this one."""
        for name in self.numeric_fields():
            setattr(self, name, getattr(self, name) + getattr(other, name))

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.numeric_fields()}


@dataclass
class EmployeeReport(ReportTotals):
    """Per-employee row of a payroll, attendance or overtime report."""

    employee_id: UUID | None = None
    name: str = ""

    @classmethod
    def from_parts(
        cls,
        employee_id: UUID,
        name: str,
        hours: HoursBreakdown,
        pay: PayBreakdown,
        attendance: AttendanceSummary,
    ) -> EmployeeReport:
        return cls(
            employee_id=employee_id,
            name=name,
            regular_hours=hours.regular_hours,
            overtime_hours=hours.overtime_hours,
            weekend_hours=hours.weekend_hours,
            holiday_hours=hours.holiday_hours,
            total_hours=hours.total_hours,
            regular_pay=pay.regular_pay,
            overtime_pay=pay.overtime_pay,
            weekend_pay=pay.weekend_pay,
            holiday_pay=pay.holiday_pay,
            total_pay=pay.total_pay,
            days_present=attendance.days_present,
            days_absent=attendance.days_absent,
            late_arrivals=attendance.late_arrivals,
        )


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive calendar-day window of a report."""

    start_date: date
    end_date: date

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass
class PayrollReport:
    """Result of one report generation."""

    period: ReportPeriod
    employees: list[EmployeeReport] = field(default_factory=list)
    totals: ReportTotals = field(default_factory=ReportTotals)
