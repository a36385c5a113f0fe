"""Tests for structural validation."""

from decimal import Decimal

from invoicecheck.core.models import CisAssessment, LineItem, PrintedTotals, Totals
from invoicecheck.validators import StructuralValidator, ValidationResult


def make_item(line_total: str, vat_amount: str, vat_rate: str = "20") -> LineItem:
    return LineItem(
        description="Item",
        quantity=Decimal("1"),
        unit_price=Decimal(line_total),
        vat_rate=Decimal(vat_rate),
        vat_amount=Decimal(vat_amount),
        line_total=Decimal(line_total),
    )


class TestStructuralValidator:
    """Test cases for StructuralValidator."""

    def setup_method(self):
        """Setup test fixtures."""
        self.validator = StructuralValidator()

    def test_valid_structure(self):
        """Test that consistent totals pass."""
        items = [make_item("300.00", "60.00"), make_item("80.00", "16.00")]
        result = self.validator.validate(items, Decimal("380.00"), Decimal("456.00"))

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_no_items(self):
        result = self.validator.validate([], Decimal("0"), Decimal("0"))

        assert not result.is_valid
        assert "No line items could be extracted" in result.errors
        assert "Subtotal 0.00 is not positive" in result.errors

    def test_zero_subtotal(self):
        items = [make_item("0", "0")]
        result = self.validator.validate(items, Decimal("0"), Decimal("0"))

        assert not result.is_valid
        assert len(result.errors) == 2

    def test_gross_below_subtotal(self):
        """Test the monotonic check gross >= subtotal."""
        items = [make_item("100.00", "-20.00")]
        result = self.validator.validate(items, Decimal("100.00"), Decimal("80.00"))

        assert not result.is_valid
        assert result.errors == ["Gross 80.00 is below subtotal 100.00"]

    def test_vat_mismatch_is_warning_only(self):
        items = [make_item("100.00", "15.00")]
        result = self.validator.validate(items, Decimal("100.00"), Decimal("115.00"))

        assert result.is_valid
        assert len(result.warnings) == 1
        assert "Line 1" in result.warnings[0]

    def test_vat_within_tolerance(self):
        """Test rounding differences within 2p."""
        items = [make_item("33.33", "6.68")]
        result = self.validator.validate(items, Decimal("33.33"), Decimal("40.01"))

        assert result.warnings == []

    def test_relative_tolerance_on_large_amounts(self):
        items = [make_item("10000.00", "2010.00")]
        result = self.validator.validate(items, Decimal("10000.00"), Decimal("12010.00"))

        assert result.warnings == []

    def test_custom_absolute_tolerance(self):
        validator = StructuralValidator(absolute_tolerance=Decimal("0"))
        items = [make_item("1.00", "0.21")]

        assert len(validator.validate(items, Decimal("1.00"), Decimal("1.21")).warnings) == 1


class TestValidationResult:
    """Test cases for ValidationResult.merge."""

    def test_merge(self):
        first = ValidationResult(is_valid=True, warnings=["w1"])
        second = ValidationResult(is_valid=False, errors=["e1"], warnings=["w2"])
        merged = first.merge(second)

        assert not merged.is_valid
        assert merged.errors == ["e1"]
        assert merged.warnings == ["w1", "w2"]


class TestPrintedTotals:
    """Test cases for StructuralValidator.check_printed_totals."""

    def setup_method(self):
        """Setup test fixtures."""
        self.validator = StructuralValidator()
        items = [make_item("300.00", "60.00"), make_item("80.00", "16.00")]
        cis = CisAssessment(
            applies=True,
            rate=Decimal("20"),
            labour_base=Decimal("300.00"),
            cis_amount=Decimal("60.00"),
        )
        self.totals = Totals.from_items(items, cis)

    def test_matching_footer(self):
        printed = PrintedTotals(net=Decimal("380.00"), vat=Decimal("76.00"), total=Decimal("456.00"))
        result = self.validator.check_printed_totals(printed, self.totals)

        assert result.is_valid
        assert result.warnings == []

    def test_total_after_cis_is_accepted(self):
        printed = PrintedTotals(total=Decimal("396.00"))

        assert self.validator.check_printed_totals(printed, self.totals).warnings == []

    def test_mismatching_footer(self):
        printed = PrintedTotals(net=Decimal("400.00"), vat=Decimal("90.00"), total=Decimal("500.00"))
        result = self.validator.check_printed_totals(printed, self.totals)

        assert result.is_valid
        assert len(result.warnings) == 3
        assert result.warnings[0] == "Printed subtotal 400.00 doesn't match computed subtotal 380.00"

    def test_missing_figures_are_skipped(self):
        assert self.validator.check_printed_totals(PrintedTotals(), self.totals).warnings == []
