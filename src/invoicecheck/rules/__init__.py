"""Tax decision rules."""

from .tax_rules import TaxRuleEngine

__all__ = ["TaxRuleEngine"]
