"""Spreadsheet and PDF renderers for reports."""

from shop_payroll.exporters.pdf import build_report_pdf
from shop_payroll.exporters.spreadsheet import build_report_workbook

__all__ = ["build_report_pdf", "build_report_workbook"]
