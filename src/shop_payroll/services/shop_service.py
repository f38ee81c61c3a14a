"""Shop administration."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_payroll.errors import NotFoundError, ShopHasEmployeesError
from shop_payroll.models import Employee, Shop

logger = logging.getLogger(__name__)


class ShopService:
    """CRUD for shops. A shop with assigned employees cannot be deleted."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_shops(self) -> list[tuple[Shop, int]]:
        """All shops with their employee count."""
        counts = (
            select(Employee.shop_id, func.count().label("employee_count"))
            .where(Employee.shop_id.is_not(None))
            .group_by(Employee.shop_id)
            .subquery()
        )
        result = await self.session.execute(
            select(Shop, func.coalesce(counts.c.employee_count, 0))
            .outerjoin(counts, counts.c.shop_id == Shop.shop_id)
            .order_by(Shop.name)
        )
        return [(shop, int(count)) for shop, count in result.all()]

    async def get_shop(self, shop_id: UUID) -> Shop:
        shop = await self.session.get(Shop, shop_id)
        if shop is None:
            raise NotFoundError("Shop", shop_id)
        return shop

    async def create_shop(self, values: dict[str, Any]) -> Shop:
        shop = Shop(**values)
        self.session.add(shop)
        await self.session.flush()
        return shop

    async def update_shop(self, shop_id: UUID, values: dict[str, Any]) -> Shop:
        shop = await self.get_shop(shop_id)
        for key, value in values.items():
            setattr(shop, key, value)
        await self.session.flush()
        return shop

    async def delete_shop(self, shop_id: UUID) -> None:
        """Delete a shop.

        Raises:
            NotFoundError: Unknown shop
            ShopHasEmployeesError: Employees are still assigned to it
        """
        shop = await self.get_shop(shop_id)
        employee_count = await self.session.scalar(
            select(func.count()).select_from(Employee).where(Employee.shop_id == shop_id)
        )
        if employee_count:
            raise ShopHasEmployeesError(shop_id, int(employee_count))

        await self.session.delete(shop)
        await self.session.flush()
        logger.info("Deleted shop %s", shop_id)
