"""Global pay settings model (single row)."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from shop_payroll.models.base import Base, TimestampMixin

SETTINGS_ROW_ID = 1


class PaySettings(Base, TimestampMixin):
    """Pay configuration shared by every shop and employee."""

    __tablename__ = "pay_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    payroll_start_day: Mapped[int] = mapped_column(Integer, nullable=False, default=25)
    payroll_end_day: Mapped[int] = mapped_column(Integer, nullable=False, default=24)
    work_day_start_time: Mapped[str] = mapped_column(String(5), nullable=False, default="08:00")
    work_day_end_time: Mapped[str] = mapped_column(String(5), nullable=False, default="17:00")
    overtime_rate: Mapped[Decimal] = mapped_column(
        Numeric(3, 1), nullable=False, default=Decimal("1.5")
    )
    weekend_rate: Mapped[Decimal] = mapped_column(
        Numeric(3, 1), nullable=False, default=Decimal("2.0")
    )
    holiday_rate: Mapped[Decimal] = mapped_column(
        Numeric(3, 1), nullable=False, default=Decimal("2.5")
    )
    holidays: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint(
            "payroll_start_day BETWEEN 1 AND 31 AND payroll_end_day BETWEEN 1 AND 31",
            name="pay_settings_days_check",
        ),
        CheckConstraint(
            "overtime_rate >= 1 AND weekend_rate >= 1 AND holiday_rate >= 1",
            name="pay_settings_rates_check",
        ),
    )
