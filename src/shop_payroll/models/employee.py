"""Employee and shop models."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from shop_payroll.models.time_entry import TimeEntry


class Shop(Base, TimestampMixin):
    """Physical shop location employees are assigned to."""

    __tablename__ = "shop"

    shop_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    employees: Mapped[list[Employee]] = relationship(back_populates="shop")


class Employee(Base, TimestampMixin):
    """Employee record."""

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    surname: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    cell_number: Mapped[str] = mapped_column(String, nullable=False)
    id_number: Mapped[str] = mapped_column(String, nullable=False)
    gender: Mapped[str] = mapped_column(String, nullable=False, default="male")
    hourly_rate: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    shop_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("shop.shop_id", ondelete="RESTRICT"),
        nullable=True,
    )
    documents: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    additional_fields: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )

    __table_args__ = (
        CheckConstraint("hourly_rate >= 0", name="employee_hourly_rate_check"),
    )

    # Relationships
    shop: Mapped[Shop | None] = relationship(back_populates="employees")
    time_entries: Mapped[list[TimeEntry]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        """Get full name."""
        return f"{self.name} {self.surname}"
