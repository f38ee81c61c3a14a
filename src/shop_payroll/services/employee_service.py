"""Employee administration and document handling."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shop_payroll.errors import NotFoundError
from shop_payroll.models import Employee, Shop
from shop_payroll.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class EmployeeService:
    """CRUD for employees.

    Row changes are flushed into the caller's transaction. Stored files are
    removed only after the caller commits (`purge_documents`,
    `discard_document`).
    """

    def __init__(self, session: AsyncSession, documents: DocumentStore):
        self.session = session
        self.documents = documents

    async def list_employees(
        self,
        shop_id: UUID | None = None,
        is_active: bool | None = None,
    ) -> list[Employee]:
        query = select(Employee).order_by(Employee.name, Employee.surname)
        if shop_id is not None:
            query = query.where(Employee.shop_id == shop_id)
        if is_active is not None:
            query = query.where(Employee.is_active == is_active)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_employee(self, employee_id: UUID) -> Employee:
        employee = await self.session.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        return employee

    async def create_employee(self, values: dict[str, Any]) -> Employee:
        if values.get("shop_id") is not None:
            await self._require_shop(values["shop_id"])
        employee = Employee(**values)
        self.session.add(employee)
        await self.session.flush()
        logger.info("Created employee %s", employee.employee_id)
        return employee

    async def update_employee(self, employee_id: UUID, values: dict[str, Any]) -> Employee:
        employee = await self.get_employee(employee_id)
        if values.get("shop_id") is not None:
            await self._require_shop(values["shop_id"])
        for key, value in values.items():
            setattr(employee, key, value)
        await self.session.flush()
        return employee

    async def assign_shop(self, employee_id: UUID, shop_id: UUID | None) -> Employee:
        """Assign an employee to a shop, or unassign with ``None``."""
        employee = await self.get_employee(employee_id)
        if shop_id is not None:
            await self._require_shop(shop_id)
        employee.shop_id = shop_id
        await self.session.flush()
        return employee

    async def delete_employee(self, employee_id: UUID) -> None:
        result = await self.session.execute(
            select(Employee)
            .where(Employee.employee_id == employee_id)
            .options(selectinload(Employee.time_entries))
        )
        employee = result.scalar_one_or_none()
        if employee is None:
            raise NotFoundError("Employee", employee_id)

        await self.session.delete(employee)
        await self.session.flush()
        logger.info("Deleted employee %s", employee_id)

    async def purge_documents(self, employee_id: UUID) -> None:
        """Remove every stored file of a deleted employee."""
        await asyncio.to_thread(self.documents.delete_all, employee_id)

    async def add_document(self, employee_id: UUID, filename: str, content: bytes) -> Employee:
        employee = await self.get_employee(employee_id)
        stored_name = await asyncio.to_thread(
            self.documents.save, employee_id, filename, content
        )
        # Reassign so the JSON column is flagged dirty
        employee.documents = [*(employee.documents or []), stored_name]
        await self.session.flush()
        return employee

    async def remove_document(self, employee_id: UUID, stored_name: str) -> Employee:
        employee = await self.get_employee(employee_id)
        if stored_name not in (employee.documents or []):
            raise NotFoundError("Document", stored_name)
        employee.documents = [d for d in employee.documents if d != stored_name]
        await self.session.flush()
        return employee

    async def discard_document(self, employee_id: UUID, stored_name: str) -> None:
        """Remove a stored file that is no longer referenced."""
        await asyncio.to_thread(self.documents.delete, employee_id, stored_name)

    async def _require_shop(self, shop_id: UUID) -> None:
        if await self.session.get(Shop, shop_id) is None:
            raise NotFoundError("Shop", shop_id)
