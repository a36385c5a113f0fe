"""Invoice validators."""

from .structure_validator import StructuralValidator, ValidationResult

__all__ = ["StructuralValidator", "ValidationResult"]
