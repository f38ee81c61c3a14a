"""Dashboard API endpoint."""

from fastapi import APIRouter

from shop_payroll.api.dependencies import CurrentUser, DbSession
from shop_payroll.api.schemas import DashboardResponse
from shop_payroll.services.dashboard_service import DashboardRange, DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    db: DbSession,
    user: CurrentUser,
    range: DashboardRange = DashboardRange.MONTH,
) -> DashboardResponse:
    dashboard = await DashboardService(db).get_dashboard(range)
    return DashboardResponse.model_validate(dashboard, from_attributes=True)
