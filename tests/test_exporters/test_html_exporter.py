"""Tests for the HTML corrected invoice renderer."""

from invoicecheck.exporters import HTMLExporter


class TestHTMLExporter:
    """Test cases for HTMLExporter."""

    def setup_method(self):
        """Setup test fixtures."""
        self.exporter = HTMLExporter()

    def test_rows_and_totals(self, sample_breakdown):
        result = self.exporter.export(sample_breakdown)

        assert "Corrected Invoice" in result
        assert "<td>Carpentry labour</td>" in result
        assert "CIS (20%)" in result
        assert "-60.00" in result
        assert "<b>396.00</b>" in result

    def test_descriptions_are_escaped(self, sample_breakdown):
        result = self.exporter.export(sample_breakdown)

        assert "Timber &lt;materials&gt; &amp; fixings" in result
        assert "<materials>" not in result

    def test_quantities_and_rates_without_decimals(self, sample_breakdown):
        result = self.exporter.export(sample_breakdown)

        assert '<td style="text-align:right">2</td>' in result
        assert '<td style="text-align:right">20%</td>' in result

    def test_format_properties(self):
        assert self.exporter.format_name == "HTML"
        assert self.exporter.file_extension == ".html"
        assert self.exporter.mime_type == "text/html"
