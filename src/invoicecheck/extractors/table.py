"""Locate the line-item table inside unstructured invoice text."""

import logging
import re

from .base import TableRegion, is_numeric_token

logger = logging.getLogger(__name__)

DESCRIPTION_COLUMN_RE = re.compile(
    r"\b(description|item|items|qty|quantity|details|service|services)\b",
    re.IGNORECASE,
)
PRICE_COLUMN_RE = re.compile(
    r"\b(unit|price|rate|amount|vat|total|cost)\b",
    re.IGNORECASE,
)
TERMINATOR_RE = re.compile(
    r"(\bsub[\s-]?total\b|\bnet\s+total\b|\btotal\s+net\b|^totals?\b)",
    re.IGNORECASE,
)


class TableLocator:
    """
    Find the header row of a line-item table and return the rows below it.

    A header must name a description-like column followed by a price-like
    column, and carries no numbers (address and phone lines do).
    Rows are collected until a subtotal-like line or the scan limit.
    """

    def __init__(self, scan_limit: int = 40):
        self.scan_limit = scan_limit

    def locate(self, text: str) -> TableRegion:
        """
        Locate the table region.

        Args:
            text: Raw invoice text

        Returns:
            TableRegion; found is False when no header row exists
        """
        lines = self.split_lines(text)

        header_index = next(
            (i for i, line in enumerate(lines) if self.is_header(line)),
            None,
        )
        if header_index is None:
            logger.info("No line-item table header found")
            return TableRegion(found=False)

        region = TableRegion(found=True, header=lines[header_index])

        for line in lines[header_index + 1:]:
            if TERMINATOR_RE.search(line):
                region.terminated = True
                break
            if len(region.lines) >= self.scan_limit:
                region.truncated = True
                break
            region.lines.append(line)

        logger.info(
            f"Table header '{region.header}' found, {len(region.lines)} candidate lines "
            f"(terminated={region.terminated}, truncated={region.truncated})"
        )
        return region

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """Split text into trimmed, non-empty lines."""
        return [line.strip() for line in (text or "").splitlines() if line.strip()]

    @staticmethod
    def is_header(line: str) -> bool:
        """Check if a line looks like a table header row."""
        if any(is_numeric_token(token) for token in line.split()):
            return False
        description = DESCRIPTION_COLUMN_RE.search(line)
        if not description:
            return False
        return bool(PRICE_COLUMN_RE.search(line, description.end()))
