"""Pay settings API endpoints."""

from fastapi import APIRouter

from shop_payroll.api.dependencies import CurrentUser, DbSession
from shop_payroll.api.schemas import SettingsResponse, SettingsUpdate
from shop_payroll.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(db: DbSession, user: CurrentUser) -> SettingsResponse:
    """Get pay settings, creating the defaults on first use."""
    settings = await SettingsService(db).get_or_create_settings()
    await db.commit()
    return SettingsResponse.model_validate(settings)


@router.put("", response_model=SettingsResponse)
async def update_settings(
    db: DbSession,
    user: CurrentUser,
    payload: SettingsUpdate,
) -> SettingsResponse:
    """Replace the pay settings; the response shows the stored row."""
    settings = await SettingsService(db).update_settings(payload.model_dump())
    await db.commit()
    await db.refresh(settings)
    return SettingsResponse.model_validate(settings)
