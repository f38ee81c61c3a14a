"""API routes."""

from shop_payroll.api.routes.auth import router as auth_router
from shop_payroll.api.routes.dashboard import router as dashboard_router
from shop_payroll.api.routes.employees import router as employees_router
from shop_payroll.api.routes.health import router as health_router
from shop_payroll.api.routes.reports import router as reports_router
from shop_payroll.api.routes.settings import router as settings_router
from shop_payroll.api.routes.shops import router as shops_router
from shop_payroll.api.routes.time_entries import router as time_entries_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "employees_router",
    "health_router",
    "reports_router",
    "settings_router",
    "shops_router",
    "time_entries_router",
]
