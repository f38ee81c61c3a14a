"""Storage access for report generation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shop_payroll.calculators.types import Holiday, PayRules, TimeEntryInput
from shop_payroll.models import SETTINGS_ROW_ID, Employee, PaySettings, TimeEntry


@dataclass(frozen=True)
class EmployeeRecord:
    """Employee fields the report needs."""

    employee_id: UUID
    name: str
    hourly_rate: Decimal
    shop_id: UUID | None = None
    is_active: bool = True


@dataclass(frozen=True)
class EntryRecord:
    """A time entry with its employee, if the employee still resolves."""

    entry: TimeEntryInput
    employee: EmployeeRecord | None


class ReportRepository(Protocol):
    """What the report generator needs from storage."""

    async def get_rules(self) -> PayRules | None: ...

    async def find_entries(
        self,
        start: datetime,
        end: datetime,
        shop_id: UUID | None = None,
        employee_id: UUID | None = None,
    ) -> list[EntryRecord]: ...

    async def find_employees(
        self,
        shop_id: UUID | None = None,
        employee_id: UUID | None = None,
    ) -> list[EmployeeRecord]: ...


def rules_from_settings(settings: PaySettings) -> PayRules:
    """Convert the stored settings row into engine pay rules."""
    return PayRules(
        work_day_start_time=settings.work_day_start_time,
        work_day_end_time=settings.work_day_end_time,
        overtime_rate=Decimal(settings.overtime_rate),
        weekend_rate=Decimal(settings.weekend_rate),
        holiday_rate=Decimal(settings.holiday_rate),
        holidays=tuple(
            Holiday(date=h["date"], name=h.get("name", "")) for h in settings.holidays or []
        ),
        payroll_start_day=settings.payroll_start_day,
        payroll_end_day=settings.payroll_end_day,
    )


def employee_record(employee: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        employee_id=employee.employee_id,
        name=employee.full_name,
        hourly_rate=Decimal(employee.hourly_rate),
        shop_id=employee.shop_id,
        is_active=employee.is_active,
    )


class SqlReportRepository:
    """ReportRepository over the SQLAlchemy async session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_rules(self) -> PayRules | None:
        settings = await self.session.get(PaySettings, SETTINGS_ROW_ID)
        if settings is None:
            return None
        return rules_from_settings(settings)

    async def find_entries(
        self,
        start: datetime,
        end: datetime,
        shop_id: UUID | None = None,
        employee_id: UUID | None = None,
    ) -> list[EntryRecord]:
        """Entries clocked in within [start, end].

        The shop filter uses the employee's current assignment.
        """
        query = (
            select(TimeEntry)
            .outerjoin(Employee, TimeEntry.employee_id == Employee.employee_id)
            .where(TimeEntry.clock_in >= start, TimeEntry.clock_in <= end)
            .options(selectinload(TimeEntry.employee))
            .order_by(TimeEntry.clock_in)
        )
        if shop_id is not None:
            query = query.where(Employee.shop_id == shop_id)
        if employee_id is not None:
            query = query.where(TimeEntry.employee_id == employee_id)

        result = await self.session.execute(query)
        records = []
        for entry in result.scalars().all():
            records.append(
                EntryRecord(
                    entry=TimeEntryInput(
                        employee_id=entry.employee_id,
                        clock_in=entry.clock_in,
                        clock_out=entry.clock_out,
                        time_entry_id=entry.time_entry_id,
                    ),
                    employee=employee_record(entry.employee) if entry.employee else None,
                )
            )
        return records

    async def find_employees(
        self,
        shop_id: UUID | None = None,
        employee_id: UUID | None = None,
    ) -> list[EmployeeRecord]:
        query = select(Employee).order_by(Employee.name, Employee.surname)
        if shop_id is not None:
            query = query.where(Employee.shop_id == shop_id)
        if employee_id is not None:
            query = query.where(Employee.employee_id == employee_id)

        result = await self.session.execute(query)
        return [employee_record(e) for e in result.scalars().all()]
