"""CSV exporter for corrected invoice breakdowns."""

import csv
import io
from decimal import Decimal

from ..core.models import InvoiceBreakdown
from ..utils.numbers import format_quantity
from .base import BaseExporter


class CSVExporter(BaseExporter):
    """Export corrected invoice breakdown to CSV format."""

    @property
    def format_name(self) -> str:
        return "CSV"

    @property
    def file_extension(self) -> str:
        return ".csv"

    @property
    def mime_type(self) -> str:
        return "text/csv"

    def export(self, breakdown: InvoiceBreakdown) -> str:
        """
        Export breakdown to CSV string.

        Creates a CSV with:
        - Line items table
        - Totals section (subtotal, VAT, CIS, total due)

        Args:
            breakdown: Line items and totals

        Returns:
            CSV content as string
        """
        output = io.StringIO()
        writer = csv.writer(output)

        # Line items header
        writer.writerow(["Line Items"])
        writer.writerow([
            "Line",
            "Description",
            "Quantity",
            "Unit Price",
            "VAT Rate %",
            "VAT Amount",
            "Line Total",
            "VAT Rate Assumed",
        ])

        for number, item in enumerate(breakdown.items, start=1):
            writer.writerow([
                number,
                item.description,
                self._format_decimal(item.quantity),
                self._format_decimal(item.unit_price),
                self._format_decimal(item.vat_rate),
                self._format_decimal(item.vat_amount),
                self._format_decimal(item.line_total),
                "yes" if item.vat_rate_assumed else "no",
            ])

        writer.writerow([])

        totals = breakdown.totals
        writer.writerow(["Totals"])
        writer.writerow(["Subtotal", self._format_decimal(totals.subtotal)])
        writer.writerow(["VAT", self._format_decimal(totals.vat_total)])
        writer.writerow(["Gross", self._format_decimal(totals.gross)])
        writer.writerow(["Labour Base", self._format_decimal(totals.labour_base)])
        writer.writerow([f"CIS Deduction ({format_quantity(breakdown.cis_rate)}%)", self._format_decimal(totals.cis_amount)])
        writer.writerow(["Total Due", self._format_decimal(totals.total_due)])

        return output.getvalue()

    def _format_decimal(self, value: Decimal | None) -> str:
        """Format decimal for CSV output."""
        if value is None:
            return ""
        return f"{value:.2f}"
