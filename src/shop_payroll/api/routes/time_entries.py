"""Time clock API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from shop_payroll.api.dependencies import CurrentUser, DbSession
from shop_payroll.api.schemas import ClockInRequest, ErrorResponse, TimeEntryResponse
from shop_payroll.models import TimeEntry
from shop_payroll.services.clock_service import ClockService

router = APIRouter(prefix="/time-entries", tags=["time-entries"])


def _entry_response(entry: TimeEntry, employee_name: str | None = None) -> TimeEntryResponse:
    resp = TimeEntryResponse.model_validate(entry)
    resp.employee_name = employee_name
    return resp


@router.get("", response_model=list[TimeEntryResponse])
async def list_time_entries(
    db: DbSession,
    user: CurrentUser,
    employee_id: UUID | None = None,
) -> list[TimeEntryResponse]:
    """List time entries, newest first."""
    entries = await ClockService(db).list_entries(employee_id)
    return [_entry_response(e, e.employee.full_name if e.employee else None) for e in entries]


@router.post(
    "",
    response_model=TimeEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def clock_in(
    db: DbSession,
    user: CurrentUser,
    payload: ClockInRequest,
) -> TimeEntryResponse:
    """Clock an employee in."""
    entry = await ClockService(db).clock_in(payload.employee_id)
    await db.commit()
    return _entry_response(entry)


@router.put(
    "/{time_entry_id}/clock-out",
    response_model=TimeEntryResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def clock_out(
    db: DbSession,
    user: CurrentUser,
    time_entry_id: Annotated[UUID, Path()],
) -> TimeEntryResponse:
    """Clock out of an open time entry."""
    entry = await ClockService(db).clock_out(time_entry_id)
    await db.commit()
    return _entry_response(entry, entry.employee.full_name)
