"""Tests for CSV exporter."""

import csv
import io

from invoicecheck.exporters import CSVExporter


class TestCSVExporter:
    """Test cases for CSVExporter."""

    def setup_method(self):
        """Setup test fixtures."""
        self.exporter = CSVExporter()

    def test_export_produces_csv_string(self, sample_breakdown):
        """Test that export produces a CSV string."""
        result = self.exporter.export(sample_breakdown)

        assert isinstance(result, str)
        assert len(result) > 0

    def test_export_contains_line_items(self, sample_breakdown):
        """Test that CSV contains line items."""
        rows = list(csv.reader(io.StringIO(self.exporter.export(sample_breakdown))))

        assert rows[2] == ["1", "Carpentry labour", "2.00", "150.00", "20.00", "60.00", "300.00", "yes"]
        assert rows[3][1] == "Timber <materials> & fixings"
        assert rows[3][-1] == "no"

    def test_export_contains_totals(self, sample_breakdown):
        """Test that CSV contains totals."""
        rows = list(csv.reader(io.StringIO(self.exporter.export(sample_breakdown))))
        totals = {row[0]: row[1] for row in rows if len(row) == 2}

        assert totals["Subtotal"] == "380.00"
        assert totals["VAT"] == "76.00"
        assert totals["Gross"] == "456.00"
        assert totals["CIS Deduction (20%)"] == "60.00"
        assert totals["Total Due"] == "396.00"

    def test_format_properties(self):
        """Test exporter format properties."""
        assert self.exporter.format_name == "CSV"
        assert self.exporter.file_extension == ".csv"
        assert self.exporter.mime_type == "text/csv"
