"""PDF export of payroll, attendance and overtime reports."""

from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from shop_payroll.calculators.types import PayrollReport
from shop_payroll.services.report_service import PAY_FIELDS, REPORT_COLUMNS, ReportType


def format_value(key: str, value: Any) -> str:
    """Render a report cell: currency for pay, two decimals for hours."""
    if key in PAY_FIELDS:
        return f"R{Decimal(value):,.2f}"
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def build_report_pdf(report: PayrollReport, report_type: ReportType) -> bytes:
    """Build a single-table PDF with a title, the period and a totals row."""
    columns = REPORT_COLUMNS[report_type]
    styles = getSampleStyleSheet()

    output = BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=A4,
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=f"{report_type.value.capitalize()} Report",
    )

    period = (
        f"Period: {report.period.start_date:%d %b %Y} to "
        f"{report.period.end_date:%d %b %Y}"
    )
    story = [
        Paragraph(f"{report_type.value.upper()} REPORT", styles["Title"]),
        Paragraph(period, styles["Normal"]),
        Spacer(1, 0.5 * cm),
    ]

    data = [[header for _, header in columns]]
    for row in report.employees:
        data.append([format_value(key, getattr(row, key)) for key, _ in columns])

    totals = report.totals.to_dict()
    data.append(
        ["TOTALS" if key == "name" else format_value(key, totals[key]) for key, _ in columns]
    )

    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#E5E5E5")),
                ("LINEABOVE", (0, -1), (-1, -1), 1, colors.black),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
            ]
        )
    )
    story.append(table)

    doc.build(story)
    return output.getvalue()
