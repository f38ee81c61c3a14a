"""Dashboard statistics over employees, shops and recent time entries."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_payroll.calculators.engine import hours_between, parse_clock_time
from shop_payroll.models import SETTINGS_ROW_ID, Employee, PaySettings, Shop, TimeEntry
from shop_payroll.services.settings_service import DEFAULT_SETTINGS

ZERO = Decimal("0")


class DashboardRange(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


def range_start(now: datetime, range_: DashboardRange) -> datetime:
    """Start of the look-back window ending at ``now``."""
    if range_ is DashboardRange.WEEK:
        return now - timedelta(days=7)
    months = {DashboardRange.MONTH: 1, DashboardRange.QUARTER: 3, DashboardRange.YEAR: 12}[range_]
    index = now.year * 12 + (now.month - 1) - months
    year, month = index // 12, index % 12 + 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def average_rate(employees: list[Employee]) -> Decimal:
    if not employees:
        return ZERO
    total = sum((Decimal(e.hourly_rate) for e in employees), ZERO)
    return (total / len(employees)).quantize(Decimal("0.01"))


@dataclass
class AttendanceToday:
    present: int = 0
    absent: int = 0
    late: int = 0


@dataclass
class ShopPerformance:
    shop_id: UUID
    shop_name: str
    total_hours: Decimal
    employee_count: int
    average_rate: Decimal


@dataclass
class Dashboard:
    total_employees: int
    active_employees: int
    total_shops: int
    average_hourly_rate: Decimal
    attendance_today: AttendanceToday
    shop_performance: list[ShopPerformance] = field(default_factory=list)


class DashboardService:
    """Headline numbers for the admin dashboard."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_dashboard(
        self,
        range_: DashboardRange = DashboardRange.MONTH,
        now: datetime | None = None,
    ) -> Dashboard:
        now = now or datetime.now()
        employees = list((await self.session.execute(select(Employee))).scalars().all())
        shops = list(
            (await self.session.execute(select(Shop).order_by(Shop.name))).scalars().all()
        )
        entries = list(
            (
                await self.session.execute(
                    select(TimeEntry).where(
                        TimeEntry.clock_in >= range_start(now, range_),
                        TimeEntry.clock_in <= now,
                    )
                )
            )
            .scalars()
            .all()
        )

        shop_of = {e.employee_id: e.shop_id for e in employees}
        performance = []
        for shop in shops:
            shop_employees = [e for e in employees if e.shop_id == shop.shop_id]
            shop_hours = sum(
                (
                    max(hours_between(t.clock_in, t.clock_out or now), ZERO)
                    for t in entries
                    if shop_of.get(t.employee_id) == shop.shop_id
                ),
                ZERO,
            )
            performance.append(
                ShopPerformance(
                    shop_id=shop.shop_id,
                    shop_name=shop.name,
                    total_hours=shop_hours.quantize(Decimal("0.01")),
                    employee_count=len(shop_employees),
                    average_rate=average_rate(shop_employees),
                )
            )

        return Dashboard(
            total_employees=len(employees),
            active_employees=sum(1 for e in employees if e.is_active),
            total_shops=len(shops),
            average_hourly_rate=average_rate(employees),
            attendance_today=await self._attendance_today(entries, employees, now),
            shop_performance=performance,
        )

    async def _attendance_today(
        self,
        entries: list[TimeEntry],
        employees: list[Employee],
        now: datetime,
    ) -> AttendanceToday:
        settings = await self.session.get(PaySettings, SETTINGS_ROW_ID)
        start_text = (
            settings.work_day_start_time
            if settings is not None
            else DEFAULT_SETTINGS["work_day_start_time"]
        )
        work_start = parse_clock_time(start_text)

        day_start = datetime.combine(now.date(), time.min)
        today = [t for t in entries if t.clock_in >= day_start]
        present = {t.employee_id for t in today}
        return AttendanceToday(
            present=len(present),
            absent=max(0, len(employees) - len(present)),
            late=sum(1 for t in today if t.clock_in.time() > work_start),
        )
