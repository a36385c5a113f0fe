"""Read the printed subtotal, VAT and total figures from invoice text."""

import logging
import re
from decimal import Decimal

from ..core.models import PrintedTotals
from ..utils.numbers import parse_amount
from .base import is_numeric_token
from .table import TableLocator

logger = logging.getLogger(__name__)

# Checked in this order: "Total net" is a net line, not a total line
NET_LABEL_RE = re.compile(r"^(sub[\s-]?total|net\s+total|total\s+net|net)\b", re.IGNORECASE)
VAT_LABEL_RE = re.compile(
    r"^(vat|tax)\b(?!\s*(reg|no\b|number|registration|id\b))",
    re.IGNORECASE,
)
TOTAL_LABEL_RE = re.compile(
    r"^(total|grand\s+total|invoice\s+total|amount\s+due|balance\s+due)\b",
    re.IGNORECASE,
)


class FooterAmountReader:
    """
    Pick up the footer figures an invoice prints below its table.

    A figure is the last amount on a labelled line, or the amount alone on
    the next line ("VAT" / "400.00"). The first labelled line wins for
    each figure.
    """

    LABELS = (
        ("net", NET_LABEL_RE),
        ("vat", VAT_LABEL_RE),
        ("total", TOTAL_LABEL_RE),
    )

    def read(self, text: str) -> PrintedTotals:
        """
        Read printed figures.

        Args:
            text: Raw invoice text

        Returns:
            PrintedTotals with None for every figure not printed
        """
        lines = TableLocator.split_lines(text)
        figures: dict[str, Decimal] = {}

        for index, line in enumerate(lines):
            field = self._label(line)
            if field is None or field in figures:
                continue
            amount = self._last_amount(line, decimal_only=field == "vat")
            if amount is None and index + 1 < len(lines):
                following = lines[index + 1].split()
                if len(following) == 1 and self._is_amount(following[0], field == "vat"):
                    amount = parse_amount(following[0])
            if amount is not None:
                figures[field] = amount

        if figures:
            logger.info(f"Printed footer figures: {figures}")
        return PrintedTotals(**figures)

    def _label(self, line: str) -> str | None:
        for field, pattern in self.LABELS:
            if pattern.search(line):
                return field
        return None

    @staticmethod
    def _is_amount(token: str, decimal_only: bool) -> bool:
        # VAT figures carry pence; "VAT @ 20 %" holds no amount
        return is_numeric_token(token) and (not decimal_only or "." in token)

    def _last_amount(self, line: str, decimal_only: bool = False) -> Decimal | None:
        amounts = [token for token in line.split() if self._is_amount(token, decimal_only)]
        if not amounts:
            return None
        return parse_amount(amounts[-1])
