"""HTML rendering of the corrected invoice preview."""

from html import escape

from ..core.models import InvoiceBreakdown
from ..utils.numbers import format_money, format_quantity
from .base import BaseExporter

BRAND_COLOUR = "#4e65ac"
HIGHLIGHT = "#eef2ff"


class HTMLExporter(BaseExporter):
    """Render the corrected invoice as an HTML table fragment."""

    @property
    def format_name(self) -> str:
        return "HTML"

    @property
    def file_extension(self) -> str:
        return ".html"

    @property
    def mime_type(self) -> str:
        return "text/html"

    def export(self, breakdown: InvoiceBreakdown) -> str:
        """
        Export breakdown to an HTML fragment.

        One row per line item, then Subtotal, VAT, CIS and Total Due rows.
        """
        totals = breakdown.totals
        cis_label = f"CIS ({format_quantity(breakdown.cis_rate)}%)"
        rows = "".join(
            "<tr>"
            f"<td>{escape(item.description)}</td>"
            f'<td style="text-align:right">{format_quantity(item.quantity)}</td>'
            f'<td style="text-align:right">{item.unit_price:.2f}</td>'
            f'<td style="text-align:right">{format_quantity(item.vat_rate)}%</td>'
            f'<td style="text-align:right">{item.vat_amount:.2f}</td>'
            f'<td style="text-align:right">{item.line_total:.2f}</td>'
            "</tr>"
            for item in breakdown.items
        )

        return (
            '<div style="font-family:Arial; font-size:14px;">'
            f'<h3 style="color:{BRAND_COLOUR}">Corrected Invoice</h3>'
            '<table style="width:100%; border-collapse:collapse;">'
            "<tr><th>Description</th><th>Qty</th><th>Unit (£)</th>"
            "<th>VAT Rate</th><th>VAT (£)</th><th>Line Total (£)</th></tr>"
            f"{rows}"
            f"{self._total_row('Subtotal', format_money(totals.subtotal), bold=True)}"
            f"{self._total_row('VAT', format_money(totals.vat_total))}"
            f"{self._total_row(cis_label, '-' + format_money(totals.cis_amount))}"
            f"{self._total_row('Total Due', format_money(totals.total_due), bold=True, background=HIGHLIGHT)}"
            "</table>"
            "</div>"
        )

    def _total_row(self, label: str, value: str, bold: bool = False, background: str | None = None) -> str:
        style = "text-align:right" + (f";background:{background}" if background else "")
        shown = f"<b>{value}</b>" if bold else value
        return (
            f'<tr><td colspan="5" style="{style}"><b>{label}</b></td>'
            f'<td style="{style}">{shown}</td></tr>'
        )

