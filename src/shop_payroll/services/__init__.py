"""Shop payroll services."""

from shop_payroll.services.clock_service import ClockService
from shop_payroll.services.dashboard_service import DashboardRange, DashboardService
from shop_payroll.services.document_store import DocumentStore, LocalDocumentStore
from shop_payroll.services.employee_service import EmployeeService
from shop_payroll.services.report_service import REPORT_COLUMNS, ReportService, ReportType
from shop_payroll.services.repository import ReportRepository, SqlReportRepository
from shop_payroll.services.settings_service import SettingsService
from shop_payroll.services.shop_service import ShopService

__all__ = [
    "ClockService",
    "DashboardRange",
    "DashboardService",
    "DocumentStore",
    "LocalDocumentStore",
    "EmployeeService",
    "REPORT_COLUMNS",
    "ReportService",
    "ReportType",
    "ReportRepository",
    "SqlReportRepository",
    "SettingsService",
    "ShopService",
]
