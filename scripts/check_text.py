#!/usr/bin/env python3
"""Local checking script for InvoiceCheck.

Run the compliance engine over invoice text without starting the server.
Useful for development and debugging.

Usage:
    python scripts/check_text.py --file path/to/invoice.txt
    python scripts/check_text.py --file invoice.txt --end-user --category reduced-5
    python scripts/check_text.py --sample  # Use built-in sample text
    python scripts/check_text.py --file invoice.txt --analyse  # Also call the LLM
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from invoicecheck.core.models import ComplianceFlags, VatCategory
from invoicecheck.core.pipeline import ComplianceEngine
from invoicecheck.exporters import CSVExporter, ExcelExporter
from invoicecheck.normalizers import NarrativeAnalyzer

SAMPLE_TEXT = """
INVOICE 2024-117
Brick & Beam Contractors Ltd   VAT Reg: GB123456789

Description              Qty   Unit Price   VAT     Amount
Bricklaying labour        2     150.00      20%     300.00
Sand and cement           4      20.00      20%      80.00
Subtotal                                            380.00
VAT                                                  76.00
Total                                               456.00
"""


def print_assessment(
    raw_text: str,
    flags: ComplianceFlags,
    output_dir: Path | None = None,
    engine: ComplianceEngine | None = None,
) -> None:
    """Run the engine and print the assessment."""
    engine = engine or ComplianceEngine()
    assessment = engine.assess(raw_text, flags)
    report = assessment.report

    print(f"\n{'='*60}")
    print("Compliance assessment")
    print(f"{'='*60}\n")

    print(f"Table found: {assessment.table_found}")
    decision = assessment.decision
    if decision is not None:
        print(f"VAT decision: {decision.vat_label} (DRC: {decision.drc_applies})")
        print(f"Reason: {decision.reason}")
    else:
        print("VAT decision: unavailable")

    print(f"\nLine Items: {len(assessment.items)} (skipped: {assessment.items_skipped})")
    for item in assessment.items:
        assumed = " (assumed rate)" if item.vat_rate_assumed else ""
        print(
            f"  {item.description}: {item.quantity} x {item.unit_price} = "
            f"{item.line_total}, VAT {item.vat_rate}%{assumed}"
        )

    totals = assessment.totals
    print("\nTotals:")
    print(f"  Subtotal: {totals.subtotal}")
    print(f"  VAT: {totals.vat_total}")
    print(f"  CIS: {totals.cis_amount} on labour {totals.labour_base}")
    print(f"  Total due: {totals.total_due}")

    printed = assessment.printed_totals
    if printed.found:
        print(f"Printed: net {printed.net}, VAT {printed.vat}, total {printed.total}")

    print(f"\nStructure valid: {assessment.structure_valid}")
    for error in assessment.validation_errors:
        print(f"  Error: {error}")
    for warning in assessment.validation_warnings:
        print(f"  Warning: {warning}")

    print("\n--- Report ---")
    print(json.dumps(report.model_dump(exclude={"corrected_invoice"}), indent=2))

    if output_dir and assessment.structure_valid:
        output_dir.mkdir(parents=True, exist_ok=True)
        csv_path = output_dir / "corrected_invoice.csv"
        xlsx_path = output_dir / "corrected_invoice.xlsx"
        csv_path.write_text(CSVExporter().export(assessment.breakdown), encoding="utf-8")
        xlsx_path.write_bytes(ExcelExporter().export(assessment.breakdown))
        print(f"\nExports written to {output_dir}")


async def print_analysis(raw_text: str, flags: ComplianceFlags) -> None:
    """Run the narrative analysis and print its report."""
    print("\n--- Narrative analysis ---")
    report = await NarrativeAnalyzer().analyse(raw_text, flags)
    print(json.dumps(report.model_dump(), indent=2))


def main():
    parser = argparse.ArgumentParser(description="Local compliance checks for InvoiceCheck")
    parser.add_argument("--file", "-f", type=Path, help="Text file with invoice content")
    parser.add_argument("--sample", action="store_true", help="Use the built-in sample invoice")
    parser.add_argument(
        "--category",
        choices=[c.value for c in VatCategory],
        default=VatCategory.STANDARD.value,
        help="VAT category selected by the user",
    )
    parser.add_argument("--end-user", action="store_true", help="Customer confirmed as end user")
    parser.add_argument("--analyse", action="store_true", help="Also run the LLM narrative analysis")
    parser.add_argument("--output-dir", "-o", type=Path, help="Write CSV and Excel exports here")

    args = parser.parse_args()

    if args.sample:
        raw_text = SAMPLE_TEXT
    elif args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}")
            sys.exit(1)
        raw_text = args.file.read_text(encoding="utf-8")
    else:
        parser.print_help()
        print("\nExample:")
        print("  python scripts/check_text.py --sample")
        print("  python scripts/check_text.py --file invoice.txt")
        return

    flags = ComplianceFlags(vat_category=args.category, end_user_confirmed=args.end_user)
    print_assessment(raw_text, flags, args.output_dir)

    if args.analyse:
        asyncio.run(print_analysis(raw_text, flags))


if __name__ == "__main__":
    main()
