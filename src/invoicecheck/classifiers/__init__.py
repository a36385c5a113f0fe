"""Description classifiers."""

from .labour import LabourClassifier

__all__ = ["LabourClassifier"]
