"""Pay settings singleton."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from shop_payroll.models import SETTINGS_ROW_ID, PaySettings

logger = logging.getLogger(__name__)

DEFAULT_HOLIDAYS: list[dict[str, str]] = [
    {"date": "2024-01-01", "name": "New Year's Day"},
    {"date": "2024-03-21", "name": "Human Rights Day"},
    {"date": "2024-03-29", "name": "Good Friday"},
    {"date": "2024-04-01", "name": "Family Day"},
    {"date": "2024-04-27", "name": "Freedom Day"},
    {"date": "2024-05-01", "name": "Workers' Day"},
    {"date": "2024-06-16", "name": "Youth Day"},
    {"date": "2024-08-09", "name": "National Women's Day"},
    {"date": "2024-09-24", "name": "Heritage Day"},
    {"date": "2024-12-16", "name": "Day of Reconciliation"},
    {"date": "2024-12-25", "name": "Christmas Day"},
    {"date": "2024-12-26", "name": "Day of Goodwill"},
]

DEFAULT_SETTINGS: dict[str, Any] = {
    "payroll_start_day": 25,
    "payroll_end_day": 24,
    "work_day_start_time": "08:00",
    "work_day_end_time": "17:00",
    "overtime_rate": Decimal("1.5"),
    "weekend_rate": Decimal("2.0"),
    "holiday_rate": Decimal("2.5"),
}


class SettingsService:
    """Reads and updates the single pay settings row.

    Only the settings screen seeds defaults; report generation treats a
    missing row as a configuration error.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_settings(self) -> PaySettings | None:
        return await self.session.get(PaySettings, SETTINGS_ROW_ID)

    async def get_or_create_settings(self) -> PaySettings:
        settings = await self.get_settings()
        if settings is None:
            settings = PaySettings(
                id=SETTINGS_ROW_ID,
                holidays=[dict(h) for h in DEFAULT_HOLIDAYS],
                **DEFAULT_SETTINGS,
            )
            self.session.add(settings)
            await self.session.flush()
            logger.info("Created default pay settings")
        return settings

    async def update_settings(self, values: dict[str, Any]) -> PaySettings:
        """Apply already-validated values to the settings row."""
        settings = await self.get_settings()
        if settings is None:
            settings = PaySettings(id=SETTINGS_ROW_ID, **DEFAULT_SETTINGS, holidays=[])
            self.session.add(settings)

        for key, value in values.items():
            if key == "holidays":
                value = [{"date": h["date"], "name": h["name"]} for h in value]
            setattr(settings, key, value)

        await self.session.flush()
        logger.info("Updated pay settings: %s", sorted(values))
        return settings
