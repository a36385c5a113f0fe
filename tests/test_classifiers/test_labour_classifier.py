"""Tests for the labour classifier."""

import pytest

from invoicecheck.classifiers import LabourClassifier


class TestLabourClassifier:
    """Test cases for LabourClassifier."""

    def setup_method(self):
        """Setup test fixtures."""
        self.classifier = LabourClassifier()

    @pytest.mark.parametrize(
        "description",
        [
            "Carpentry labour",
            "Bricklaying to rear extension",
            "Electrical installation first floor",
            "Scaffolding erection",
            "Plasterer 2 days",
            "Electrician 6 hrs",
            "LABOUR",
            "Labor charge",
        ],
    )
    def test_labour_descriptions(self, description):
        assert self.classifier.is_labour(description)

    @pytest.mark.parametrize(
        "description",
        [
            "Timber materials",
            "Copper pipe 15mm",
            "Three bags of sand",
            "Skip hire",
            "",
        ],
    )
    def test_non_labour_descriptions(self, description):
        assert not self.classifier.is_labour(description)

    def test_time_markers_match_whole_words_only(self):
        """Test that "hr" inside another word is not a labour marker."""
        assert not self.classifier.is_labour("Thread sealant")
        assert not self.classifier.is_labour("Daylight tiles")
        assert self.classifier.is_labour("Fitter 1 day")

    def test_none_is_not_labour(self):
        assert not self.classifier.is_labour(None)

    def test_materials(self):
        assert self.classifier.is_materials("Timber and screws")
        assert self.classifier.is_materials("Plasterboard 12.5mm")
        assert not self.classifier.is_materials("Carpentry labour")

    def test_custom_vocabulary(self):
        classifier = LabourClassifier(labour_terms=["fitting"], labour_markers=[], material_terms=["glass"])

        assert classifier.is_labour("Window fitting")
        assert not classifier.is_labour("Carpentry labour")
        assert classifier.is_materials("Double glazed glass unit")

    def test_document_signals_ignore_time_markers(self):
        """Test that payment terms in days are not a labour signal."""
        assert not self.classifier.has_labour_signals("Payment terms: 30 days")
        assert not self.classifier.has_labour_signals("Delivery within 48 hours")
        assert self.classifier.has_labour_signals("Carpentry to first floor")

    def test_empty_vocabulary_matches_nothing(self):
        classifier = LabourClassifier(labour_terms=[], labour_markers=[])

        assert not classifier.is_labour("Carpentry labour")
        assert not classifier.has_labour_signals("Carpentry labour")
