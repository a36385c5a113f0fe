"""Table location and line-item extraction."""

from .base import ExtractionRule, LineContext, RuleMatch, TableRegion
from .footer import FooterAmountReader
from .line_items import LineItemParser, ParseOutcome
from .table import TableLocator

__all__ = [
    "ExtractionRule",
    "FooterAmountReader",
    "LineContext",
    "LineItemParser",
    "ParseOutcome",
    "RuleMatch",
    "TableLocator",
    "TableRegion",
]
