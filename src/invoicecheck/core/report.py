"""Compose the compliance report from the engine's intermediate results."""

from ..exporters.html_exporter import HTMLExporter
from ..utils.numbers import format_money, format_quantity
from .models import (
    CisAssessment,
    ComplianceReport,
    InvoiceBreakdown,
    Totals,
    VatDecision,
)

REVERSE_CHARGE_WORDING = (
    "Reverse Charge: Customer must account for VAT to HMRC (VAT Act 1994 Section 55A)."
)
NEW_BUILD_WORDING = "Zero-rated supply: construction of a new dwelling (VAT Act 1994 Schedule 8 Group 5)."
STANDARD_WORDING = "Standard VAT rules apply."
CIS_WORDING = "CIS: deduction applies to the labour element only."

INCOMPLETE_SUMMARY = "Invoice reviewed. Data incomplete - no corrected invoice preview generated."


class ReportComposer:
    """Build the ComplianceReport narrative and corrected invoice preview."""

    def __init__(self, renderer: HTMLExporter | None = None):
        self.renderer = renderer or HTMLExporter()

    def compose(
        self,
        decision: VatDecision,
        reverse_charge_wording: bool,
        has_labour: bool,
        has_materials: bool,
        cis: CisAssessment,
        breakdown: InvoiceBreakdown,
        structure_valid: bool,
        items_skipped: int = 0,
    ) -> ComplianceReport:
        """
        Assemble the report.

        Narrative fields are always filled; the corrected invoice preview
        is only rendered when the structure is valid.
        """
        return ComplianceReport(
            vat_check=self._vat_check(decision, reverse_charge_wording, has_labour, has_materials),
            cis_check=self._cis_check(cis),
            required_wording=self._required_wording(decision, cis),
            summary=self._summary(breakdown.totals, structure_valid, items_skipped),
            corrected_invoice=self.renderer.export(breakdown) if structure_valid else None,
            items_skipped=items_skipped,
        )

    @staticmethod
    def no_table_report() -> ComplianceReport:
        """Degraded report when no line-item table could be found."""
        return ComplianceReport(
            vat_check="Unable to determine VAT.",
            cis_check="Unable to determine CIS.",
            required_wording="N/A",
            summary="Invoice has no identifiable table. Upload a clearer PDF.",
            corrected_invoice=None,
        )

    @staticmethod
    def error_report() -> ComplianceReport:
        """Fixed-shape report for an unexpected internal fault."""
        return ComplianceReport(
            vat_check="Error",
            cis_check="Error",
            required_wording="Error",
            summary="Compliance engine crashed",
            corrected_invoice=None,
        )

    def _vat_check(
        self,
        decision: VatDecision,
        reverse_charge_wording: bool,
        has_labour: bool,
        has_materials: bool,
    ) -> str:
        parts = []

        # Printed wording and the rate decision answer different questions
        if reverse_charge_wording and decision.drc_applies:
            parts.append("VAT removed - Domestic Reverse Charge wording found on the invoice.")
        elif reverse_charge_wording:
            parts.append("Reverse charge wording found on the invoice, but DRC is excluded for this supply.")

        parts.append(f"{decision.vat_label}. {decision.reason}")

        if decision.drc_applies and not reverse_charge_wording:
            parts.append("No reverse charge wording found on the invoice.")

        if has_labour and has_materials:
            parts.append("Invoice combines labour and materials.")
        elif has_materials:
            parts.append("Materials-only supply.")

        return " ".join(parts)

    def _cis_check(self, cis: CisAssessment) -> str:
        if not cis.applies:
            return "CIS does not apply to this invoice."
        return (
            f"CIS deduction at {format_quantity(cis.rate)}% applied: £{format_money(cis.cis_amount)} "
            f"on labour of £{format_money(cis.labour_base)}."
        )

    def _required_wording(self, decision: VatDecision, cis: CisAssessment) -> str:
        if decision.new_build:
            wording = NEW_BUILD_WORDING
        elif decision.drc_applies:
            wording = REVERSE_CHARGE_WORDING
        else:
            wording = STANDARD_WORDING

        if cis.applies:
            wording = f"{wording} {CIS_WORDING}"
        return wording

    def _summary(self, totals: Totals, structure_valid: bool, items_skipped: int) -> str:
        if not structure_valid:
            return INCOMPLETE_SUMMARY

        summary = (
            f"Corrected: Net £{format_money(totals.subtotal)}, VAT £{format_money(totals.vat_total)}, "
            f"CIS £{format_money(totals.cis_amount)}, Total Due £{format_money(totals.total_due)}"
        )
        if items_skipped:
            summary += f" ({items_skipped} table line(s) could not be read)"
        return summary
