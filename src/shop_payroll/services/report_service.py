"""Report generation: fetch entries, group by employee, run the engine, total up."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, time
from enum import Enum
from uuid import UUID

from shop_payroll.calculators.engine import PayrollEngine
from shop_payroll.calculators.periods import payroll_period_containing
from shop_payroll.calculators.types import (
    EmployeeReport,
    PayrollReport,
    ReportPeriod,
    ReportTotals,
    TimeEntryInput,
)
from shop_payroll.errors import SettingsNotFoundError
from shop_payroll.services.repository import EmployeeRecord, ReportRepository

logger = logging.getLogger(__name__)


class ReportType(str, Enum):
    """Which report fields the presentation layer shows."""

    PAYROLL = "payroll"
    ATTENDANCE = "attendance"
    OVERTIME = "overtime"


# (field, header) per report type, in display order
REPORT_COLUMNS: dict[ReportType, tuple[tuple[str, str], ...]] = {
    ReportType.PAYROLL: (
        ("name", "Employee"),
        ("regular_hours", "Regular Hours"),
        ("overtime_hours", "Overtime Hours"),
        ("regular_pay", "Regular Pay"),
        ("overtime_pay", "Overtime Pay"),
        ("total_pay", "Total Pay"),
    ),
    ReportType.ATTENDANCE: (
        ("name", "Employee"),
        ("days_present", "Days Present"),
        ("days_absent", "Days Absent"),
        ("late_arrivals", "Late Arrivals"),
        ("total_hours", "Total Hours"),
    ),
    ReportType.OVERTIME: (
        ("name", "Employee"),
        ("regular_hours", "Regular Hours"),
        ("overtime_hours", "Overtime Hours"),
        ("overtime_pay", "Overtime Pay"),
    ),
}

PAY_FIELDS = frozenset({"regular_pay", "overtime_pay", "weekend_pay", "holiday_pay", "total_pay"})


def day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """Expand a date range to full calendar days."""
    return (
        datetime.combine(start_date, time.min),
        datetime.combine(end_date, time.max),
    )


def sum_reports(reports: list[EmployeeReport]) -> ReportTotals:
    """Field-wise sum of every numeric field across employee rows."""
    totals = ReportTotals()
    for report in reports:
        totals.add(report)
    return totals


class ReportService:
    """Builds payroll, attendance and overtime reports.

    All three report types share one computation; the type only picks
    the columns a renderer shows. Employees without entries in range
    are left out unless ``include_absent`` is requested.
    """

    def __init__(self, repository: ReportRepository):
        self.repository = repository

    async def current_period(self, today: date | None = None) -> ReportPeriod:
        """The configured payroll period containing ``today``."""
        rules = await self.repository.get_rules()
        if rules is None:
            raise SettingsNotFoundError()
        return payroll_period_containing(
            today or date.today(), rules.payroll_start_day, rules.payroll_end_day
        )

    async def generate_report(
        self,
        start_date: date,
        end_date: date,
        shop_id: UUID | None = None,
        employee_id: UUID | None = None,
        include_absent: bool = False,
        now: datetime | None = None,
    ) -> PayrollReport:
        """Generate a report over [start_date, end_date], whole days.

        Raises:
            SettingsNotFoundError: If no pay settings are stored
            ConfigurationError: If stored settings cannot be interpreted
            ValueError: If the range is reversed
        """
        if end_date < start_date:
            raise ValueError(f"End date {end_date} is before start date {start_date}")

        rules = await self.repository.get_rules()
        if rules is None:
            raise SettingsNotFoundError()

        engine = PayrollEngine(rules, now=now or datetime.now())
        range_start, range_end = day_bounds(start_date, end_date)
        records = await self.repository.find_entries(
            range_start, range_end, shop_id=shop_id, employee_id=employee_id
        )

        employees: dict[UUID, EmployeeRecord] = {}
        grouped: dict[UUID, list[TimeEntryInput]] = defaultdict(list)
        for record in records:
            if record.employee is None:
                logger.warning(
                    "Skipping time entry %s: employee %s not found",
                    record.entry.time_entry_id,
                    record.entry.employee_id,
                )
                continue
            employees[record.employee.employee_id] = record.employee
            grouped[record.employee.employee_id].append(record.entry)

        if include_absent:
            for employee in await self.repository.find_employees(
                shop_id=shop_id, employee_id=employee_id
            ):
                if employee.is_active and employee.employee_id not in employees:
                    employees[employee.employee_id] = employee

        rows = [
            engine.build_employee_report(
                employee_id=emp.employee_id,
                name=emp.name,
                hourly_rate=emp.hourly_rate,
                entries=grouped.get(emp.employee_id, []),
                start_date=start_date,
                end_date=end_date,
            )
            for emp in employees.values()
        ]
        rows.sort(key=lambda r: (r.name, str(r.employee_id)))

        logger.info(
            "Generated report %s..%s: %d employee(s) from %d entries",
            start_date,
            end_date,
            len(rows),
            len(records),
        )

        return PayrollReport(
            period=ReportPeriod(start_date, end_date),
            employees=rows,
            totals=sum_reports(rows),
        )
