"""Tests for line-item parsing and its extraction rules."""

from decimal import Decimal

from invoicecheck.extractors import LineItemParser
from invoicecheck.extractors.base import LineContext, RuleMatch
from invoicecheck.extractors.line_items import (
    ComputedVatAmountRule,
    NoVatMarkerRule,
    PrintedVatAmountRule,
    QuantityRule,
    UnitPriceRule,
)


class TestLineItemParser:
    """Test cases for LineItemParser."""

    def setup_method(self):
        """Setup test fixtures."""
        self.parser = LineItemParser(default_vat_rate=Decimal("20"), max_items=10)

    def test_plain_line_uses_default_rate(self):
        """Test a line with quantity and unit price but no VAT marker."""
        item = self.parser.parse_line("Carpentry labour 2 150.00")

        assert item.description == "Carpentry labour"
        assert item.quantity == Decimal("2")
        assert item.unit_price == Decimal("150.00")
        assert item.line_total == Decimal("300.00")
        assert item.vat_rate == Decimal("20")
        assert item.vat_amount == Decimal("60.00")
        assert item.vat_rate_assumed

    def test_percentage_sets_rate(self):
        """Test that the trailing line total is not mistaken for VAT."""
        item = self.parser.parse_line("Bricklaying labour 2 150.00 20% 300.00")

        assert item.vat_rate == Decimal("20")
        assert not item.vat_rate_assumed
        assert item.vat_amount == Decimal("60.00")
        assert item.line_total == Decimal("300.00")

    def test_printed_vat_amount(self):
        item = self.parser.parse_line("Sand and cement 4 20.00 20% 16.00 96.00")

        assert item.vat_amount == Decimal("16.00")
        assert item.line_total == Decimal("80.00")

    def test_reduced_percentage(self):
        item = self.parser.parse_line("Insulation 10 12.00 5%")

        assert item.vat_rate == Decimal("5")
        assert item.vat_amount == Decimal("6.00")

    def test_no_vat_marker(self):
        item = self.parser.parse_line("Timber 1 80.00 no VAT")

        assert item.vat_rate == Decimal("0")
        assert item.vat_amount == Decimal("0")
        assert not item.vat_rate_assumed

    def test_zero_rated_marker(self):
        item = self.parser.parse_line("Zero-rated blocks 10 2.50")

        assert item.description == "Zero-rated blocks"
        assert item.vat_rate == Decimal("0")

    def test_line_starting_with_quantity(self):
        """Test that the description falls back to the remaining words."""
        item = self.parser.parse_line("2 Labour day 150.00")

        assert item.description == "Labour day"
        assert item.quantity == Decimal("2")
        assert item.unit_price == Decimal("150.00")

    def test_currency_and_thousands(self):
        item = self.parser.parse_line("Skip hire 1 £1,250.00")

        assert item.unit_price == Decimal("1250.00")
        assert item.line_total == Decimal("1250.00")

    def test_line_without_numbers_is_skipped(self):
        assert self.parser.parse_line("Delivery notes attached") is None

    def test_line_with_single_number_is_skipped(self):
        assert self.parser.parse_line("Carriage 25.00") is None

    def test_configurable_default_rate(self):
        parser = LineItemParser(default_vat_rate=Decimal("0"))
        item = parser.parse_line("Carpentry labour 2 150.00")

        assert item.vat_rate == Decimal("0")
        assert item.vat_amount == Decimal("0")
        assert item.vat_rate_assumed

    def test_parse_lines_counts_skipped(self):
        outcome = self.parser.parse_lines([
            "Carpentry labour 2 150.00",
            "Notes: see attached",
            "Timber materials 1 80.00",
        ])

        assert [item.description for item in outcome.items] == ["Carpentry labour", "Timber materials"]
        assert outcome.skipped == 1
        assert not outcome.capped

    def test_parse_lines_caps_items(self):
        parser = LineItemParser(max_items=2)
        outcome = parser.parse_lines([f"Row {i} 1 10.00" for i in range(5)])

        assert len(outcome.items) == 2
        assert outcome.capped

    def test_field_order(self):
        """Test the declared order of field resolution."""
        assert [name for name, _ in self.parser.field_rules] == [
            "quantity",
            "unit_price",
            "description",
            "vat_rate",
            "vat_amount",
        ]


class TestExtractionRules:
    """Test cases for individual extraction rules."""

    def setup_method(self):
        """Setup test fixtures."""
        self.parser = LineItemParser(default_vat_rate=Decimal("20"), max_items=10)

    def test_quantity_rule_takes_first_number(self):
        line = LineContext.from_line("Labour 3 45.00 20%")
        match = QuantityRule().apply(line, {})

        assert match.value == Decimal("3")
        assert match.position == 1

    def test_unit_price_rule_needs_two_numbers(self):
        line = LineContext.from_line("Labour 3")

        assert UnitPriceRule().apply(line, {}) is None

    def test_percent_tokens_are_not_numeric(self):
        line = LineContext.from_line("Labour 20% 3 45.00")

        assert line.numeric_positions == [2, 3]

    def test_no_vat_rule_ignores_other_lines(self):
        line = LineContext.from_line("Labour 3 45.00")

        assert NoVatMarkerRule().apply(line, {}) is None

    def test_printed_amount_rule_needs_unit_price(self):
        line = LineContext.from_line("Labour 3 45.00 27.00")

        assert PrintedVatAmountRule().apply(line, {}) is None

    def test_computed_amount_rule(self):
        line = LineContext.from_line("Labour 3 45.00")
        found = {
            "quantity": RuleMatch(value=Decimal("3"), rule="first_number", position=1),
            "unit_price": RuleMatch(value=Decimal("45.00"), rule="second_number", position=2),
            "vat_rate": RuleMatch(value=Decimal("5"), rule="percentage"),
        }
        match = ComputedVatAmountRule().apply(line, found)

        assert match.value == Decimal("6.75")
        assert match.rule == "computed"

    def test_overlong_numbers_are_not_amounts(self):
        """Test that a digit run beyond the amount limit is not parsed."""
        assert self.parser.parse_line("Labour 2 " + "9" * 30) is None
        assert not LineContext.from_line("9" * 13).numeric_positions
        assert LineContext.from_line("999,999,999.99").numeric_positions == [0]
