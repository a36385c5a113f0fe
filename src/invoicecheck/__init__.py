"""Invoice VAT, Domestic Reverse Charge and CIS compliance checker."""

__version__ = "0.1.0"
