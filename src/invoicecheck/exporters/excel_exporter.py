"""Excel exporter for corrected invoice breakdowns."""

import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..core.models import InvoiceBreakdown
from ..utils.numbers import format_quantity
from .base import BaseExporter


class ExcelExporter(BaseExporter):
    """Export corrected invoice breakdown to Excel format."""

    # Styles
    HEADER_FILL = PatternFill(start_color="4E65AC", end_color="4E65AC", fill_type="solid")
    HEADER_FONT = Font(color="FFFFFF", bold=True)
    TOTAL_FILL = PatternFill(start_color="EEF2FF", end_color="EEF2FF", fill_type="solid")
    BORDER = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )
    MONEY_FORMAT = "#,##0.00"

    @property
    def format_name(self) -> str:
        return "Excel"

    @property
    def file_extension(self) -> str:
        return ".xlsx"

    @property
    def mime_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def export(self, breakdown: InvoiceBreakdown) -> bytes:
        """
        Export breakdown to Excel bytes.

        Single "Corrected Invoice" sheet: line items then totals rows.

        Args:
            breakdown: Line items and totals

        Returns:
            Excel file content as bytes
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Corrected Invoice"

        headers = ["Description", "Qty", "Unit (£)", "VAT Rate %", "VAT (£)", "Line Total (£)"]
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = self.HEADER_FILL
            cell.font = self.HEADER_FONT
            cell.border = self.BORDER
            cell.alignment = Alignment(horizontal="center")

        for row_idx, item in enumerate(breakdown.items, start=2):
            data = [
                item.description,
                float(item.quantity),
                float(item.unit_price),
                float(item.vat_rate),
                float(item.vat_amount),
                float(item.line_total),
            ]
            for col, value in enumerate(data, start=1):
                cell = ws.cell(row=row_idx, column=col, value=value)
                cell.border = self.BORDER
                if col in (3, 5, 6):
                    cell.number_format = self.MONEY_FORMAT

        totals = breakdown.totals
        totals_rows = [
            ("Subtotal", totals.subtotal),
            ("VAT", totals.vat_total),
            (f"CIS Deduction ({format_quantity(breakdown.cis_rate)}%)", totals.cis_amount),
            ("Total Due", totals.total_due),
        ]

        row = len(breakdown.items) + 2
        for label, value in totals_rows:
            ws.cell(row=row, column=5, value=label).font = Font(bold=True)
            cell = ws.cell(row=row, column=6, value=float(value))
            cell.number_format = self.MONEY_FORMAT
            if label == "Total Due":
                cell.font = Font(bold=True)
                cell.fill = self.TOTAL_FILL
            row += 1

        widths = [40, 8, 12, 12, 12, 15]
        for col, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

        output = io.BytesIO()
        wb.save(output)
        output.seek(0)
        return output.read()
