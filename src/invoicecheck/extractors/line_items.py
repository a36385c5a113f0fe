"""Line-item parsing with an explicit, ordered chain of extraction rules."""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal

from ..core.models import LineItem
from ..utils.numbers import parse_amount
from .base import ExtractionRule, LineContext, RuleMatch, is_numeric_token, percent_value

logger = logging.getLogger(__name__)

NO_VAT_RE = re.compile(r"\bno\s+vat\b|\bzero[\s-]rated\b", re.IGNORECASE)
DESCRIPTION_TRIM = " -:|*\t"


class QuantityRule(ExtractionRule):
    """Quantity is the first standalone number on the line."""

    name = "first_number"

    def apply(self, line, found):
        positions = line.numeric_positions
        if not positions:
            return None
        index = positions[0]
        return RuleMatch(value=parse_amount(line.tokens[index]), rule=self.name, position=index)


class UnitPriceRule(ExtractionRule):
    """Unit price is the second numeric-looking token."""

    name = "second_number"

    def apply(self, line, found):
        positions = line.numeric_positions
        if len(positions) < 2:
            return None
        index = positions[1]
        return RuleMatch(value=parse_amount(line.tokens[index]), rule=self.name, position=index)


class LeadingTextRule(ExtractionRule):
    """Description is everything before the first run of numbers."""

    name = "leading_text"

    def apply(self, line, found):
        quantity = found.get("quantity")
        if quantity is None or quantity.position is None:
            return None
        text = " ".join(line.tokens[:quantity.position]).strip(DESCRIPTION_TRIM)
        if not text:
            return None
        return RuleMatch(value=text, rule=self.name)


class RemainingWordsRule(ExtractionRule):
    """Fallback for lines that open with the quantity: keep the words."""

    name = "remaining_words"

    def apply(self, line, found):
        words = [
            token for token in line.tokens
            if not is_numeric_token(token) and percent_value(token) is None
        ]
        text = " ".join(words).strip(DESCRIPTION_TRIM)
        return RuleMatch(value=text, rule=self.name)


class PercentageVatRule(ExtractionRule):
    """An explicit percentage token sets the VAT rate."""

    name = "percentage"

    def apply(self, line, found):
        for index, token in enumerate(line.tokens):
            rate = percent_value(token)
            if rate is not None:
                return RuleMatch(value=rate, rule=self.name, position=index)
        return None


class NoVatMarkerRule(ExtractionRule):
    """A literal "no VAT" / "zero rated" marker means 0%."""

    name = "no_vat_marker"

    def apply(self, line, found):
        if NO_VAT_RE.search(line.text):
            return RuleMatch(value=Decimal("0"), rule=self.name)
        return None


class DefaultVatRateRule(ExtractionRule):
    """Policy default when the line carries no VAT marker at all."""

    name = "default_rate"

    def __init__(self, rate: Decimal):
        self.rate = rate

    def apply(self, line, found):
        return RuleMatch(value=self.rate, rule=self.name, assumed=True)


class PrintedVatAmountRule(ExtractionRule):
    """A decimal amount after the unit price, other than the line total, is the VAT."""

    name = "printed_amount"

    def apply(self, line, found):
        unit_price = found.get("unit_price")
        if unit_price is None or unit_price.position is None:
            return None
        line_total = _line_total(found)

        for index in line.numeric_positions:
            if index <= unit_price.position:
                continue
            token = line.tokens[index]
            if "." not in token:
                continue
            amount = parse_amount(token)
            if amount == line_total:
                continue
            return RuleMatch(value=amount, rule=self.name, position=index)
        return None


class ComputedVatAmountRule(ExtractionRule):
    """VAT amount computed as line total x rate / 100."""

    name = "computed"

    def apply(self, line, found):
        rate = found["vat_rate"].value
        return RuleMatch(value=_line_total(found) * rate / Decimal("100"), rule=self.name)


def _line_total(found: dict[str, RuleMatch]) -> Decimal:
    return found["quantity"].value * found["unit_price"].value


@dataclass
class ParseOutcome:
    """Items recovered from a table region."""

    items: list[LineItem] = field(default_factory=list)
    skipped: int = 0
    # Collection stopped at the item cap
    capped: bool = False


class LineItemParser:
    """
    Turn table lines into LineItems.

    Fields are resolved in a fixed order; for each field the rules are tried
    in sequence and the first match wins. Lines without a quantity or a unit
    price are skipped, never failed.
    """

    REQUIRED_FIELDS = ("quantity", "unit_price")

    def __init__(self, default_vat_rate: Decimal = Decimal("20"), max_items: int = 10):
        self.max_items = max_items
        self.field_rules: list[tuple[str, list[ExtractionRule]]] = [
            ("quantity", [QuantityRule()]),
            ("unit_price", [UnitPriceRule()]),
            ("description", [LeadingTextRule(), RemainingWordsRule()]),
            ("vat_rate", [PercentageVatRule(), NoVatMarkerRule(), DefaultVatRateRule(default_vat_rate)]),
            ("vat_amount", [PrintedVatAmountRule(), ComputedVatAmountRule()]),
        ]

    def parse_line(self, line: str) -> LineItem | None:
        """
        Parse one table line.

        Args:
            line: Trimmed table line

        Returns:
            LineItem, or None when the line has no usable quantity or price
        """
        context = LineContext.from_line(line)
        found: dict[str, RuleMatch] = {}

        for field_name, rules in self.field_rules:
            match = next(
                (m for m in (rule.apply(context, found) for rule in rules) if m is not None),
                None,
            )
            if match is None:
                if field_name in self.REQUIRED_FIELDS:
                    logger.debug(f"Skipping line without {field_name}: {line!r}")
                    return None
                continue
            found[field_name] = match

        return LineItem(
            description=found["description"].value,
            quantity=found["quantity"].value,
            unit_price=found["unit_price"].value,
            vat_rate=found["vat_rate"].value,
            vat_amount=found["vat_amount"].value,
            line_total=_line_total(found),
            vat_rate_assumed=found["vat_rate"].assumed,
        )

    def parse_lines(self, lines: list[str]) -> ParseOutcome:
        """Parse table lines until the item cap is reached."""
        outcome = ParseOutcome()

        for line in lines:
            if len(outcome.items) >= self.max_items:
                outcome.capped = True
                break
            item = self.parse_line(line)
            if item is None:
                outcome.skipped += 1
                continue
            outcome.items.append(item)

        if outcome.skipped:
            logger.info(f"Skipped {outcome.skipped} unparseable table lines")
        if outcome.capped:
            logger.warning(f"Line item cap of {self.max_items} reached, remaining lines ignored")
        return outcome
