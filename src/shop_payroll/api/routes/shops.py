"""Shop API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from shop_payroll.api.dependencies import CurrentUser, DbSession
from shop_payroll.api.schemas import ErrorResponse, ShopCreate, ShopResponse, ShopUpdate
from shop_payroll.services.shop_service import ShopService

router = APIRouter(prefix="/shops", tags=["shops"])


@router.get("", response_model=list[ShopResponse])
async def list_shops(db: DbSession, user: CurrentUser) -> list[ShopResponse]:
    """List shops with their employee counts."""
    rows = await ShopService(db).list_shops()
    items = []
    for shop, employee_count in rows:
        resp = ShopResponse.model_validate(shop)
        resp.employee_count = employee_count
        items.append(resp)
    return items


@router.post("", response_model=ShopResponse, status_code=status.HTTP_201_CREATED)
async def create_shop(db: DbSession, user: CurrentUser, payload: ShopCreate) -> ShopResponse:
    shop = await ShopService(db).create_shop(payload.model_dump())
    await db.commit()
    return ShopResponse.model_validate(shop)


@router.put(
    "/{shop_id}",
    response_model=ShopResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_shop(
    db: DbSession,
    user: CurrentUser,
    shop_id: Annotated[UUID, Path()],
    payload: ShopUpdate,
) -> ShopResponse:
    shop = await ShopService(db).update_shop(shop_id, payload.model_dump(exclude_unset=True))
    await db.commit()
    return ShopResponse.model_validate(shop)


@router.delete(
    "/{shop_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_shop(
    db: DbSession,
    user: CurrentUser,
    shop_id: Annotated[UUID, Path()],
) -> None:
    """Delete a shop that has no employees assigned."""
    await ShopService(db).delete_shop(shop_id)
    await db.commit()
