"""SQLAlchemy ORM models."""

from shop_payroll.models.base import Base, TimestampMixin
from shop_payroll.models.employee import Employee, Shop
from shop_payroll.models.settings import SETTINGS_ROW_ID, PaySettings
from shop_payroll.models.time_entry import TimeEntry

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "Shop",
    "PaySettings",
    "SETTINGS_ROW_ID",
    "TimeEntry",
]
