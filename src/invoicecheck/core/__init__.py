"""Core module - models and pipeline."""

from .models import (
    CisAssessment,
    ComplianceAssessment,
    ComplianceFlags,
    ComplianceReport,
    InvoiceBreakdown,
    LineItem,
    PrintedTotals,
    Totals,
    VatCategory,
    VatDecision,
)

__all__ = [
    "CisAssessment",
    "ComplianceAssessment",
    "ComplianceFlags",
    "ComplianceReport",
    "InvoiceBreakdown",
    "LineItem",
    "PrintedTotals",
    "Totals",
    "VatCategory",
    "VatDecision",
]
