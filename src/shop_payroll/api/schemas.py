"""Pydantic schemas for API request/response models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shop_payroll.services.report_service import ReportType

CLOCK_TIME_PATTERN = r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$"


# ============================================================================
# Auth schemas
# ============================================================================


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


# ============================================================================
# Shop schemas
# ============================================================================


class ShopCreate(BaseModel):
    """Schema for creating a shop."""

    name: str = Field(min_length=1)
    address: str | None = None
    is_active: bool = True


class ShopUpdate(BaseModel):
    """Schema for updating a shop. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    address: str | None = None
    is_active: bool | None = None


class ShopResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    shop_id: UUID
    name: str
    address: str | None = None
    is_active: bool
    employee_count: int = 0


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""

    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    email: str
    cell_number: str
    id_number: str
    gender: str = "male"
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    is_active: bool = True
    shop_id: UUID | None = None
    additional_fields: dict[str, str] = Field(default_factory=dict)


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    surname: str | None = Field(default=None, min_length=1)
    email: str | None = None
    cell_number: str | None = None
    id_number: str | None = None
    gender: str | None = None
    hourly_rate: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_active: bool | None = None
    shop_id: UUID | None = None
    additional_fields: dict[str, str] | None = None


class ShopAssignment(BaseModel):
    """Assign to a shop, or unassign with null."""

    shop_id: UUID | None = None


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: UUID
    name: str
    surname: str
    email: str
    cell_number: str
    id_number: str
    gender: str
    hourly_rate: Decimal
    is_active: bool
    shop_id: UUID | None = None
    documents: list[str] = []
    additional_fields: dict[str, Any] = {}


# ============================================================================
# Time entry schemas
# ============================================================================


class ClockInRequest(BaseModel):
    employee_id: UUID


class TimeEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time_entry_id: UUID
    employee_id: UUID
    employee_name: str | None = None
    clock_in: datetime
    clock_out: datetime | None = None
    earnings: Decimal


# ============================================================================
# Settings schemas
# ============================================================================


class HolidaySchema(BaseModel):
    date: str
    name: str

    @field_validator("date")
    @classmethod
    def check_iso_date(cls, value: str) -> str:
        try:
            parsed = date.fromisoformat(value)
        except ValueError:
            raise ValueError("Holiday date must be yyyy-MM-dd")
        if parsed.isoformat() != value:
            raise ValueError("Holiday date must be yyyy-MM-dd")
        return value


class SettingsUpdate(BaseModel):
    """Full pay settings. Rates are multipliers of the hourly rate."""

    payroll_start_day: int = Field(ge=1, le=31)
    payroll_end_day: int = Field(ge=1, le=31)
    work_day_start_time: str = Field(pattern=CLOCK_TIME_PATTERN)
    work_day_end_time: str = Field(pattern=CLOCK_TIME_PATTERN)
    overtime_rate: Decimal = Field(ge=1, max_digits=3, decimal_places=1)
    weekend_rate: Decimal = Field(ge=1, max_digits=3, decimal_places=1)
    holiday_rate: Decimal = Field(ge=1, max_digits=3, decimal_places=1)
    holidays: list[HolidaySchema] = []

    @model_validator(mode="after")
    def check_work_day(self) -> SettingsUpdate:
        # HH:mm strings order lexically
        if self.work_day_end_time <= self.work_day_start_time:
            raise ValueError("Work day end time must be after start time")
        return self


class SettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payroll_start_day: int
    payroll_end_day: int
    work_day_start_time: str
    work_day_end_time: str
    overtime_rate: Decimal
    weekend_rate: Decimal
    holiday_rate: Decimal
    holidays: list[HolidaySchema] = []


# ============================================================================
# Report schemas
# ============================================================================


class ReportRequest(BaseModel):
    """Report filters. Without dates the current payroll period is used."""

    start_date: date | None = None
    end_date: date | None = None
    shop_id: UUID | None = None
    employee_id: UUID | None = None
    report_type: ReportType = ReportType.PAYROLL
    include_absent: bool = False

    @model_validator(mode="after")
    def check_dates(self) -> ReportRequest:
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("Provide both start_date and end_date, or neither")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ReportDownloadRequest(ReportRequest):
    format: Literal["excel", "pdf"] = "excel"


class ReportTotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    regular_hours: Decimal
    overtime_hours: Decimal
    weekend_hours: Decimal
    holiday_hours: Decimal
    total_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    weekend_pay: Decimal
    holiday_pay: Decimal
    total_pay: Decimal
    days_present: int
    days_absent: int
    late_arrivals: int


class EmployeeReportResponse(ReportTotalsResponse):
    employee_id: UUID
    name: str


class ReportPeriodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_date: date
    end_date: date


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    report_type: ReportType
    period: ReportPeriodResponse
    employees: list[EmployeeReportResponse]
    totals: ReportTotalsResponse


# ============================================================================
# Dashboard schemas
# ============================================================================


class AttendanceTodayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    present: int
    absent: int
    late: int


class ShopPerformanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    shop_id: UUID
    shop_name: str
    total_hours: Decimal
    employee_count: int
    average_rate: Decimal


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_employees: int
    active_employees: int
    total_shops: int
    average_hourly_rate: Decimal
    attendance_today: AttendanceTodayResponse
    shop_performance: list[ShopPerformanceResponse]


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
