"""Clock-in/clock-out time entry model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Index, Numeric, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_payroll.models.base import Base

if TYPE_CHECKING:
    from shop_payroll.models.employee import Employee


class TimeEntry(Base):
    """One shift: created on clock-in, closed once on clock-out."""

    __tablename__ = "time_entry"

    time_entry_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    clock_in: Mapped[datetime] = mapped_column(nullable=False)
    clock_out: Mapped[datetime | None] = mapped_column(nullable=True)
    earnings: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )

    __table_args__ = (
        # At most one open entry per employee
        Index(
            "time_entry_one_open_per_employee",
            "employee_id",
            unique=True,
            sqlite_where=text("clock_out IS NULL"),
            postgresql_where=text("clock_out IS NULL"),
        ),
        Index("time_entry_clock_in_idx", "clock_in"),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="time_entries")

    @property
    def is_open(self) -> bool:
        """Check if the shift is still running."""
        return self.clock_out is None
