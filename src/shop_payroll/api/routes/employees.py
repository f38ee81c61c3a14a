"""Employee API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Path, Query, UploadFile, status
from fastapi.responses import FileResponse

from shop_payroll.api.dependencies import CurrentUser, DbSession, Documents
from shop_payroll.api.schemas import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorResponse,
    ShopAssignment,
)
from shop_payroll.errors import NotFoundError
from shop_payroll.services.document_store import LocalDocumentStore
from shop_payroll.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    shop_id: UUID | None = None,
    is_active: Annotated[bool | None, Query()] = None,
) -> list[EmployeeResponse]:
    employees = await EmployeeService(db, documents).list_employees(shop_id, is_active)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    payload: EmployeeCreate,
) -> EmployeeResponse:
    employee = await EmployeeService(db, documents).create_employee(payload.model_dump())
    await db.commit()
    return EmployeeResponse.model_validate(employee)


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_employee(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
) -> EmployeeResponse:
    employee = await EmployeeService(db, documents).get_employee(employee_id)
    return EmployeeResponse.model_validate(employee)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_employee(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
    payload: EmployeeUpdate,
) -> EmployeeResponse:
    employee = await EmployeeService(db, documents).update_employee(
        employee_id, payload.model_dump(exclude_unset=True)
    )
    await db.commit()
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_employee(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
) -> None:
    """Delete an employee with their time entries and documents."""
    service = EmployeeService(db, documents)
    await service.delete_employee(employee_id)
    await db.commit()
    await service.purge_documents(employee_id)


@router.put(
    "/{employee_id}/shop",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def assign_shop(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
    payload: ShopAssignment,
) -> EmployeeResponse:
    employee = await EmployeeService(db, documents).assign_shop(employee_id, payload.shop_id)
    await db.commit()
    return EmployeeResponse.model_validate(employee)


# ============================================================================
# Documents
# ============================================================================


@router.post(
    "/{employee_id}/documents",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def upload_documents(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
    files: Annotated[list[UploadFile], File()],
) -> EmployeeResponse:
    service = EmployeeService(db, documents)
    employee = await service.get_employee(employee_id)
    for upload in files:
        employee = await service.add_document(
            employee_id, upload.filename or "document", await upload.read()
        )
    await db.commit()
    return EmployeeResponse.model_validate(employee)


@router.get(
    "/{employee_id}/documents/{filename}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
)
async def download_document(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
    filename: Annotated[str, Path()],
) -> FileResponse:
    employee = await EmployeeService(db, documents).get_employee(employee_id)
    if filename not in (employee.documents or []) or not isinstance(
        documents, LocalDocumentStore
    ):
        raise NotFoundError("Document", filename)
    path = documents.path_for(employee_id, filename)
    if not path.is_file():
        raise NotFoundError("Document", filename)
    return FileResponse(path, filename=filename)


@router.delete(
    "/{employee_id}/documents/{filename}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_document(
    db: DbSession,
    user: CurrentUser,
    documents: Documents,
    employee_id: Annotated[UUID, Path()],
    filename: Annotated[str, Path()],
) -> EmployeeResponse:
    service = EmployeeService(db, documents)
    employee = await service.remove_document(employee_id, filename)
    await db.commit()
    await service.discard_document(employee_id, filename)
    return EmployeeResponse.model_validate(employee)
