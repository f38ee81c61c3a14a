"""Hours and pay calculation."""

from shop_payroll.calculators.engine import PayrollEngine, parse_clock_time, standard_hours
from shop_payroll.calculators.periods import payroll_period_containing
from shop_payroll.calculators.types import (
    EmployeeReport,
    EntryBucket,
    Holiday,
    HoursBreakdown,
    PayBreakdown,
    PayRules,
    PayrollReport,
    ReportPeriod,
    ReportTotals,
    TimeEntryInput,
)

__all__ = [
    "PayrollEngine",
    "parse_clock_time",
    "standard_hours",
    "payroll_period_containing",
    "EmployeeReport",
    "EntryBucket",
    "Holiday",
    "HoursBreakdown",
    "PayBreakdown",
    "PayRules",
    "PayrollReport",
    "ReportPeriod",
    "ReportTotals",
    "TimeEntryInput",
]
