"""Clock-in / clock-out of employees."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shop_payroll.calculators.engine import hours_between, to_cents
from shop_payroll.errors import (
    AlreadyClockedInError,
    AlreadyClockedOutError,
    EmployeeInactiveError,
    NotFoundError,
)
from shop_payroll.models import Employee, TimeEntry

logger = logging.getLogger(__name__)


def flat_earnings(clock_in: datetime, clock_out: datetime, hourly_rate: Decimal) -> Decimal:
    """Earnings of one shift at the flat hourly rate, no multipliers."""
    return to_cents(hours_between(clock_in, clock_out) * Decimal(hourly_rate))


class ClockService:
    """Opens and closes time entries.

    Invariants:
    - at most one open entry per employee (checked in the transaction and
      backed by a partial unique index for concurrent clock-ins)
    - an entry is closed exactly once (conditional update on clock_out IS NULL)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def clock_in(self, employee_id: UUID, now: datetime | None = None) -> TimeEntry:
        """Open a new time entry for an employee.

        Raises:
            NotFoundError: Unknown employee
            EmployeeInactiveError: Employee is not active
            AlreadyClockedInError: Employee already has an open entry
        """
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        if not employee.is_active:
            raise EmployeeInactiveError(employee_id)

        open_entry = await self.get_open_entry(employee_id)
        if open_entry is not None:
            raise AlreadyClockedInError(employee_id)

        entry = TimeEntry(
            employee_id=employee_id,
            clock_in=now or datetime.now(),
            earnings=Decimal("0"),
        )
        self.session.add(entry)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # A concurrent clock-in won the race for the open-entry index
            await self.session.rollback()
            raise AlreadyClockedInError(employee_id) from e

        logger.info("Employee %s clocked in at %s", employee_id, entry.clock_in)
        return entry

    async def clock_out(self, time_entry_id: UUID, now: datetime | None = None) -> TimeEntry:
        """Close an open time entry and record its flat-rate earnings.

        Raises:
            NotFoundError: Unknown time entry
            AlreadyClockedOutError: Entry was already closed
        """
        entry = await self._load_entry(time_entry_id)
        if entry is None:
            raise NotFoundError("Time entry", time_entry_id)
        if entry.clock_out is not None:
            raise AlreadyClockedOutError(time_entry_id)

        clock_out = now or datetime.now()
        earnings = flat_earnings(entry.clock_in, clock_out, entry.employee.hourly_rate)

        result = await self.session.execute(
            update(TimeEntry)
            .where(
                TimeEntry.time_entry_id == time_entry_id,
                TimeEntry.clock_out.is_(None),
            )
            .values(clock_out=clock_out, earnings=earnings)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            raise AlreadyClockedOutError(time_entry_id)

        await self.session.refresh(entry, ["clock_out", "earnings"])
        logger.info(
            "Employee %s clocked out of entry %s, earnings %s",
            entry.employee_id,
            time_entry_id,
            earnings,
        )
        return entry

    async def get_open_entry(self, employee_id: UUID) -> TimeEntry | None:
        result = await self.session.execute(
            select(TimeEntry).where(
                TimeEntry.employee_id == employee_id,
                TimeEntry.clock_out.is_(None),
            )
        )
        return result.scalar_one_or_none()

    async def list_entries(self, employee_id: UUID | None = None) -> list[TimeEntry]:
        """All entries, newest first, with their employee loaded."""
        query = (
            select(TimeEntry)
            .options(selectinload(TimeEntry.employee))
            .order_by(TimeEntry.clock_in.desc())
        )
        if employee_id is not None:
            query = query.where(TimeEntry.employee_id == employee_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _load_entry(self, time_entry_id: UUID) -> TimeEntry | None:
        result = await self.session.execute(
            select(TimeEntry)
            .where(TimeEntry.time_entry_id == time_entry_id)
            .options(selectinload(TimeEntry.employee))
        )
        return result.scalar_one_or_none()
