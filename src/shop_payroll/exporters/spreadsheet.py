"""Excel export of payroll, attendance and overtime reports."""

from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from shop_payroll.calculators.types import PayrollReport
from shop_payroll.services.report_service import PAY_FIELDS, REPORT_COLUMNS, ReportType

CURRENCY_FORMAT = "R#,##0.00"
HOURS_FORMAT = "0.00"


def _cell_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


def build_report_workbook(report: PayrollReport, report_type: ReportType) -> bytes:
    """Build an .xlsx file with one row per employee and a TOTALS row."""
    columns = REPORT_COLUMNS[report_type]

    wb = Workbook()
    ws = wb.active
    ws.title = report_type.value.capitalize()

    header_font = Font(bold=True)
    header_fill = PatternFill(start_color="E5E5E5", end_color="E5E5E5", fill_type="solid")

    ws.append([header for _, header in columns])
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for row in report.employees:
        ws.append([_cell_value(getattr(row, key)) for key, _ in columns])

    ws.append([])
    totals = report.totals.to_dict()
    ws.append(
        ["TOTALS" if key == "name" else _cell_value(totals[key]) for key, _ in columns]
    )
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)

    for index, (key, _) in enumerate(columns, start=1):
        number_format = CURRENCY_FORMAT if key in PAY_FIELDS else HOURS_FORMAT
        for (cell,) in ws.iter_rows(min_row=2, min_col=index, max_col=index):
            if isinstance(cell.value, float):
                cell.number_format = number_format

    _auto_fit_columns(ws)

    output = BytesIO()
    wb.save(output)
    return output.getvalue()


def _auto_fit_columns(worksheet) -> None:
    for column in worksheet.columns:
        max_length = 0
        column_letter = column[0].column_letter
        for cell in column:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, 40)
