"""Report API endpoints."""

from datetime import date

from fastapi import APIRouter, Response

from shop_payroll.api.dependencies import CurrentUser, DbSession
from shop_payroll.api.schemas import (
    ErrorResponse,
    ReportDownloadRequest,
    ReportRequest,
    ReportResponse,
)
from shop_payroll.calculators.types import PayrollReport
from shop_payroll.exporters import build_report_pdf, build_report_workbook
from shop_payroll.services.report_service import ReportService
from shop_payroll.services.repository import SqlReportRepository

router = APIRouter(prefix="/reports", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _generate(db: DbSession, payload: ReportRequest) -> PayrollReport:
    service = ReportService(SqlReportRepository(db))
    if payload.start_date is None or payload.end_date is None:
        period = await service.current_period()
        start_date, end_date = period.start_date, period.end_date
    else:
        start_date, end_date = payload.start_date, payload.end_date

    return await service.generate_report(
        start_date=start_date,
        end_date=end_date,
        shop_id=payload.shop_id,
        employee_id=payload.employee_id,
        include_absent=payload.include_absent,
    )


@router.post(
    "",
    response_model=ReportResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate_report(
    db: DbSession,
    user: CurrentUser,
    payload: ReportRequest,
) -> ReportResponse:
    """Compute a payroll, attendance or overtime report."""
    report = await _generate(db, payload)
    return ReportResponse.model_validate(
        {
            "report_type": payload.report_type,
            "period": report.period,
            "employees": report.employees,
            "totals": report.totals,
        },
        from_attributes=True,
    )


@router.post(
    "/download",
    response_class=Response,
    responses={500: {"model": ErrorResponse}},
)
async def download_report(
    db: DbSession,
    user: CurrentUser,
    payload: ReportDownloadRequest,
) -> Response:
    """Render a report as an Excel workbook or a PDF."""
    report = await _generate(db, payload)

    if payload.format == "pdf":
        content = build_report_pdf(report, payload.report_type)
        media_type, extension = "application/pdf", "pdf"
    else:
        content = build_report_workbook(report, payload.report_type)
        media_type, extension = XLSX_MEDIA_TYPE, "xlsx"

    filename = f"report-{payload.report_type.value}-{date.today():%Y-%m-%d}.{extension}"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
