"""Structural validation of extracted invoice totals."""

from dataclasses import dataclass, field
from decimal import Decimal

from ..core.models import LineItem, PrintedTotals, Totals


@dataclass
class ValidationResult:
    """Result of validation check."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge two validation results."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )


class StructuralValidator:
    """
    Sanity gate on extracted totals before a corrected invoice is shown.

    This is a monotonic consistency check, not a tax-correctness check:
    there must be items, subtotal and gross must be positive, and gross
    must not be below subtotal.

    Printed VAT amounts that disagree with line total x rate are reported
    as warnings only.
    """

    # Absolute tolerance for rounding (2 pence)
    ABSOLUTE_TOLERANCE = Decimal("0.02")

    # Relative tolerance for larger amounts (1%)
    RELATIVE_TOLERANCE = 0.01

    def __init__(self, absolute_tolerance: Decimal | None = None):
        self.absolute_tolerance = (
            self.ABSOLUTE_TOLERANCE if absolute_tolerance is None else absolute_tolerance
        )

    def validate(self, items: list[LineItem], subtotal: Decimal, gross: Decimal) -> ValidationResult:
        """
        Validate the extracted structure.

        Args:
            items: Parsed line items
            subtotal: Sum of line totals
            gross: Subtotal plus VAT

        Returns:
            ValidationResult; is_valid gates the corrected invoice preview
        """
        result = self._validate_totals(items, subtotal, gross)
        return result.merge(self._validate_line_vat(items))

    def check_printed_totals(self, printed: PrintedTotals, totals: Totals) -> ValidationResult:
        """
        Compare printed footer figures with the computed totals.

        Mismatches are warnings only; the printed total may be shown
        before or after the CIS deduction.
        """
        warnings = []

        if printed.net is not None and not self._is_close(printed.net, totals.subtotal):
            warnings.append(
                f"Printed subtotal {printed.net:.2f} doesn't match computed subtotal {totals.subtotal:.2f}"
            )
        if printed.vat is not None and not self._is_close(printed.vat, totals.vat_total):
            warnings.append(
                f"Printed VAT {printed.vat:.2f} doesn't match computed VAT {totals.vat_total:.2f}"
            )
        if printed.total is not None and not (
            self._is_close(printed.total, totals.gross) or self._is_close(printed.total, totals.total_due)
        ):
            warnings.append(
                f"Printed total {printed.total:.2f} doesn't match computed gross {totals.gross:.2f} "
                f"or total due {totals.total_due:.2f}"
            )

        return ValidationResult(is_valid=True, warnings=warnings)

    def _validate_totals(self, items: list[LineItem], subtotal: Decimal, gross: Decimal) -> ValidationResult:
        errors = []

        if not items:
            errors.append("No line items could be extracted")
        if subtotal <= 0:
            errors.append(f"Subtotal {subtotal:.2f} is not positive")
        if gross <= 0:
            errors.append(f"Gross {gross:.2f} is not positive")
        if gross < subtotal:
            errors.append(f"Gross {gross:.2f} is below subtotal {subtotal:.2f}")

        return ValidationResult(is_valid=len(errors) == 0, errors=errors)

    def _validate_line_vat(self, items: list[LineItem]) -> ValidationResult:
        warnings = []

        for number, item in enumerate(items, start=1):
            expected_vat = item.line_total * (item.vat_rate / Decimal("100"))
            if not self._is_close(item.vat_amount, expected_vat):
                warnings.append(
                    f"Line {number}: VAT {item.vat_amount:.2f} doesn't match "
                    f"{item.vat_rate}% of {item.line_total:.2f} ({expected_vat:.2f})"
                )

        return ValidationResult(is_valid=True, warnings=warnings)

    def _is_close(self, a: Decimal, b: Decimal) -> bool:
        """
        Check if two decimal values are close enough.

        Uses both relative and absolute tolerance.
        """
        diff = abs(a - b)

        if diff <= self.absolute_tolerance:
            return True

        max_val = max(abs(a), abs(b))
        if max_val > 0:
            return float(diff / max_val) <= self.RELATIVE_TOLERANCE

        return True
