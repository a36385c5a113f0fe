"""Main compliance checking pipeline."""

import logging
from typing import Any

from ..classifiers import LabourClassifier
from ..config import Settings, get_settings
from ..extractors import FooterAmountReader, LineItemParser, TableLocator
from ..rules import TaxRuleEngine
from ..validators import StructuralValidator
from .models import ComplianceAssessment, ComplianceFlags, ComplianceReport, InvoiceBreakdown, Totals
from .report import ReportComposer

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Main compliance pipeline.

    Orchestrates: Table location -> Line parsing -> Labour classification
    -> VAT/DRC/CIS rules -> Structural validation -> Report

    The engine holds no per-call state, so one instance can serve
    concurrent calls. Every failure is absorbed into the returned report.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        table_locator: TableLocator | None = None,
        line_parser: LineItemParser | None = None,
        classifier: LabourClassifier | None = None,
        tax_rules: TaxRuleEngine | None = None,
        validator: StructuralValidator | None = None,
        composer: ReportComposer | None = None,
        footer_reader: FooterAmountReader | None = None,
    ):
        """
        Initialize pipeline with its components.

        If not provided, creates default instances from settings.
        """
        settings = settings or get_settings()

        self.table_locator = table_locator or TableLocator(scan_limit=settings.table_scan_limit)
        self.line_parser = line_parser or LineItemParser(
            default_vat_rate=settings.default_vat_rate,
            max_items=settings.max_line_items,
        )
        self.classifier = classifier or LabourClassifier()
        self.tax_rules = tax_rules or TaxRuleEngine(cis_rate=settings.cis_rate, classifier=self.classifier)
        self.validator = validator or StructuralValidator(absolute_tolerance=settings.vat_tolerance)
        self.composer = composer or ReportComposer()
        self.footer_reader = footer_reader or FooterAmountReader()

    def check(self, raw_text: str, flags: ComplianceFlags | dict[str, Any] | None = None) -> ComplianceReport:
        """
        Run the checks and return only the report.

        Args:
            raw_text: Text extracted from the invoice
            flags: Caller-supplied compliance flags

        Returns:
            ComplianceReport, always well-formed
        """
        return self.assess(raw_text, flags).report

    def assess(
        self,
        raw_text: str,
        flags: ComplianceFlags | dict[str, Any] | None = None,
    ) -> ComplianceAssessment:
        """
        Run the checks and return every intermediate result.

        Never raises: an unexpected fault yields the fixed error report.
        """
        try:
            return self._run(raw_text or "", self._coerce_flags(flags))
        except Exception:
            logger.exception("Compliance engine failed")
            return ComplianceAssessment(table_found=False, report=ReportComposer.error_report())

    def _run(self, raw_text: str, flags: ComplianceFlags) -> ComplianceAssessment:
        # Step 1: Document-level signals
        decision = self.tax_rules.decide_vat(raw_text, flags)
        reverse_charge_wording = self.tax_rules.detect_reverse_charge(raw_text)
        has_labour = self.classifier.has_labour_signals(raw_text)
        has_materials = self.classifier.is_materials(raw_text)
        printed_totals = self.footer_reader.read(raw_text)

        # Step 2: Locate table
        region = self.table_locator.locate(raw_text)
        if not region.found:
            return ComplianceAssessment(
                table_found=False,
                decision=decision,
                reverse_charge_wording=reverse_charge_wording,
                has_labour=has_labour,
                has_materials=has_materials,
                printed_totals=printed_totals,
                report=ReportComposer.no_table_report(),
            )

        # Step 3: Parse lines
        outcome = self.line_parser.parse_lines(region.lines)

        # Step 4: CIS and totals
        cis = self.tax_rules.compute_cis(outcome.items)
        totals = Totals.from_items(outcome.items, cis)

        # Step 5: Validate
        validation = self.validator.validate(outcome.items, totals.subtotal, totals.gross)
        validation = validation.merge(self.tax_rules.check_line_rates(outcome.items))
        validation = validation.merge(self.tax_rules.check_vat_numbers(raw_text))
        validation = validation.merge(self.validator.check_printed_totals(printed_totals, totals))

        if validation.is_valid:
            logger.info(f"Structure valid: {len(outcome.items)} items, gross {totals.gross:.2f}")
        else:
            logger.info(f"Structure invalid, corrected invoice suppressed: {validation.errors}")
        for warning in validation.warnings:
            logger.warning(warning)

        # Step 6: Build report
        breakdown = InvoiceBreakdown(items=outcome.items, totals=totals, cis_rate=cis.rate)
        report = self.composer.compose(
            decision=decision,
            reverse_charge_wording=reverse_charge_wording,
            has_labour=has_labour,
            has_materials=has_materials,
            cis=cis,
            breakdown=breakdown,
            structure_valid=validation.is_valid,
            items_skipped=outcome.skipped,
        )

        return ComplianceAssessment(
            table_found=True,
            items=outcome.items,
            items_skipped=outcome.skipped,
            decision=decision,
            reverse_charge_wording=reverse_charge_wording,
            has_labour=has_labour,
            has_materials=has_materials,
            cis=cis,
            totals=totals,
            printed_totals=printed_totals,
            structure_valid=validation.is_valid,
            validation_errors=validation.errors,
            validation_warnings=validation.warnings,
            report=report,
        )

    @staticmethod
    def _coerce_flags(flags: ComplianceFlags | dict[str, Any] | None) -> ComplianceFlags:
        if flags is None:
            return ComplianceFlags()
        if isinstance(flags, ComplianceFlags):
            return flags
        return ComplianceFlags.model_validate(flags)


def run_compliance_checks(
    raw_text: str,
    flags: ComplianceFlags | dict[str, Any] | None = None,
) -> ComplianceReport:
    """
    Check invoice text with a default-configured engine.

    Invalid settings are logged and yield the error report, like any other
    engine fault.
    """
    try:
        engine = ComplianceEngine()
    except Exception:
        logger.exception("Compliance engine could not be configured")
        return ReportComposer.error_report()
    return engine.check(raw_text, flags)
