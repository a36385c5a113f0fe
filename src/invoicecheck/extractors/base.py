"""Base types for table and line-item extraction."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

NUMERIC_TOKEN_RE = re.compile(r"^\(?-?[£$€]?-?\d[\d,]*(?:\.\d+)?\)?$")
# Tokens with more digits are not treated as amounts
MAX_TOKEN_DIGITS = 12
PERCENT_TOKEN_RE = re.compile(r"^\(?(\d+(?:\.\d+)?)\s?%\)?[,;]?$")


@dataclass
class TableRegion:
    """Result from locating the line-item table in raw text."""

    # False is the "no table" sentinel; callers must check it
    found: bool = False

    # Header row that opened the table
    header: str | None = None

    # Candidate rows strictly after the header
    lines: list[str] = field(default_factory=list)

    # Scanning stopped at a subtotal-like line
    terminated: bool = False

    # Scanning stopped at the scan limit
    truncated: bool = False


@dataclass
class LineContext:
    """A single table line split into tokens, shared by every rule."""

    text: str
    tokens: list[str]

    @classmethod
    def from_line(cls, line: str) -> "LineContext":
        return cls(text=line, tokens=line.split())

    @property
    def numeric_positions(self) -> list[int]:
        """Indexes of tokens that look like numbers or amounts."""
        return [i for i, token in enumerate(self.tokens) if is_numeric_token(token)]


@dataclass
class RuleMatch:
    """A value produced by one extraction rule."""

    value: Any
    rule: str
    # Token index the value came from, None for computed values
    position: int | None = None
    assumed: bool = False


class ExtractionRule(ABC):
    """One typed step of line-item extraction."""

    name: str = "rule"

    @abstractmethod
    def apply(self, line: LineContext, found: dict[str, RuleMatch]) -> RuleMatch | None:
        """
        Try to extract a value from the line.

        Args:
            line: Tokenized table line
            found: Matches produced by earlier rules, keyed by field name

        Returns:
            RuleMatch, or None if the rule does not match
        """
        pass


def is_numeric_token(token: str) -> bool:
    """Check whether a whitespace token is a standalone number or amount."""
    token = token.rstrip(",;")
    if not NUMERIC_TOKEN_RE.match(token):
        return False
    return sum(ch.isdigit() for ch in token) <= MAX_TOKEN_DIGITS


def percent_value(token: str) -> Decimal | None:
    """Return the percentage held by a token like "20%", or None."""
    match = PERCENT_TOKEN_RE.match(token)
    if not match:
        return None
    return Decimal(match.group(1))
