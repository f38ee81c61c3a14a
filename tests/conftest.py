"""Pytest fixtures for shop payroll tests."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from shop_payroll.calculators.types import Holiday, PayRules, TimeEntryInput

EMPLOYEE_ID = UUID("e5a4c9d3-4567-89ab-cdef-012345678901")


def make_entry(
    clock_in: str,
    clock_out: str | None,
    employee_id: UUID = EMPLOYEE_ID,
) -> TimeEntryInput:
    """Build an entry from ``YYYY-MM-DD HH:MM`` strings."""
    fmt = "%Y-%m-%d %H:%M"
    return TimeEntryInput(
        employee_id=employee_id,
        clock_in=datetime.strptime(clock_in, fmt),
        clock_out=datetime.strptime(clock_out, fmt) if clock_out else None,
        time_entry_id=uuid4(),
    )


@pytest.fixture
def rules() -> PayRules:
    """8-hour day (08:00-16:00) with a Thursday and a Saturday holiday."""
    return PayRules(
        work_day_start_time="08:00",
        work_day_end_time="16:00",
        overtime_rate=Decimal("1.5"),
        weekend_rate=Decimal("2.0"),
        holiday_rate=Decimal("2.5"),
        holidays=(
            Holiday(date="2024-03-21", name="Human Rights Day"),
            Holiday(date="2024-01-06", name="Stocktake Saturday"),
        ),
    )


@pytest.fixture
def nine_hour_rules() -> PayRules:
    """Default shop configuration: 08:00-17:00."""
    return PayRules(
        work_day_start_time="08:00",
        work_day_end_time="17:00",
        overtime_rate=Decimal("1.5"),
        weekend_rate=Decimal("2.0"),
        holiday_rate=Decimal("2.5"),
    )
