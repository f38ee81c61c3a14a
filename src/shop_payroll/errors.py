"""Domain exceptions shared by services, calculators and the API layer."""

from __future__ import annotations

from typing import Any
from uuid import UUID


class ShopPayrollError(Exception):
    """Base exception for all domain errors."""

    code = "SHOP_PAYROLL_ERROR"

    @property
    def context(self) -> dict[str, Any]:
        return {}


class NotFoundError(ShopPayrollError):
    """Raised when a referenced record does not exist."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: UUID | str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")

    @property
    def context(self) -> dict[str, Any]:
        return {"entity": self.entity, "id": str(self.entity_id)}


class StateConflictError(ShopPayrollError):
    """Raised when a request conflicts with the current state of a record."""

    code = "STATE_CONFLICT"


class AlreadyClockedInError(StateConflictError):
    """Raised when an employee with an open entry tries to clock in again."""

    code = "ALREADY_CLOCKED_IN"

    def __init__(self, employee_id: UUID):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} is already clocked in")

    @property
    def context(self) -> dict[str, Any]:
        return {"employee_id": str(self.employee_id)}


class AlreadyClockedOutError(StateConflictError):
    """Raised when a closed time entry is clocked out a second time."""

    code = "ALREADY_CLOCKED_OUT"

    def __init__(self, time_entry_id: UUID):
        self.time_entry_id = time_entry_id
        super().__init__(f"Time entry {time_entry_id} is already clocked out")

    @property
    def context(self) -> dict[str, Any]:
        return {"time_entry_id": str(self.time_entry_id)}


class ShopHasEmployeesError(StateConflictError):
    """Raised when deleting a shop that still has employees assigned."""

    code = "SHOP_HAS_EMPLOYEES"

    def __init__(self, shop_id: UUID, employee_count: int):
        self.shop_id = shop_id
        self.employee_count = employee_count
        super().__init__(
            f"Cannot delete shop {shop_id} with {employee_count} assigned employee(s)"
        )

    @property
    def context(self) -> dict[str, Any]:
        return {"shop_id": str(self.shop_id), "employee_count": self.employee_count}


class EmployeeInactiveError(ShopPayrollError):
    """Raised when an inactive employee tries to clock in."""

    code = "EMPLOYEE_INACTIVE"

    def __init__(self, employee_id: UUID):
        self.employee_id = employee_id
        super().__init__("Inactive employees cannot clock in")

    @property
    def context(self) -> dict[str, Any]:
        return {"employee_id": str(self.employee_id)}


class ConfigurationError(ShopPayrollError):
    """Raised when pay settings are missing or unusable."""

    code = "CONFIGURATION_ERROR"


class SettingsNotFoundError(ConfigurationError):
    """Raised when report generation runs before pay settings exist."""

    code = "SETTINGS_NOT_FOUND"

    def __init__(self) -> None:
        super().__init__("System settings not found")
