"""Health and readiness endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shop_payroll.api.dependencies import DbSession
from shop_payroll.services.settings_service import SettingsService

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    database: str


class ReadinessResponse(BaseModel):
    """``pay_settings`` is "missing" until an administrator opens the settings."""

    status: str
    pay_settings: str


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession) -> HealthResponse:
    """Report whether the database answers."""
    try:
        await db.execute(text("SELECT 1"))
        database = "healthy"
    except SQLAlchemyError:
        database = "unhealthy"

    return HealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        database=database,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(db: DbSession) -> ReadinessResponse:
    """Reports can only be generated once the pay settings row exists."""
    configured = await SettingsService(db).get_settings() is not None
    return ReadinessResponse(
        status="ready" if configured else "unconfigured",
        pay_settings="configured" if configured else "missing",
    )


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
