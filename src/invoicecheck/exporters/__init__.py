"""Corrected invoice exporters for various formats."""

from .base import BaseExporter
from .csv_exporter import CSVExporter
from .excel_exporter import ExcelExporter
from .html_exporter import HTMLExporter

__all__ = ["BaseExporter", "CSVExporter", "ExcelExporter", "HTMLExporter"]
