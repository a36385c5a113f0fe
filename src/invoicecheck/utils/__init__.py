"""Utility modules."""

from .numbers import format_money, format_quantity, parse_amount

__all__ = ["format_money", "format_quantity", "parse_amount"]
