"""Pytest configuration and fixtures."""

import pytest
from decimal import Decimal

from invoicecheck.config import Settings
from invoicecheck.core.models import (
    CisAssessment,
    ComplianceFlags,
    InvoiceBreakdown,
    LineItem,
    Totals,
    VatCategory,
)
from invoicecheck.core.pipeline import ComplianceEngine


@pytest.fixture
def labour_and_materials_text() -> str:
    """Invoice text with one labour line and one materials line, no VAT markers."""
    return """
    INVOICE INV-2024-001
    Oak & Sons Carpentry Ltd
    VAT Reg: GB123456789

    Description            Qty   Unit Price
    Carpentry labour        2     150.00
    Timber materials        1      80.00
    Subtotal                      380.00
    Total                         456.00
    """


@pytest.fixture
def new_build_text() -> str:
    """Invoice text for work on an NHBC-registered new build plot."""
    return """
    INVOICE INV-2024-002
    Plot 14, NHBC registered new dwelling

    Description            Qty   Unit Price
    Bricklaying labour      3     200.00
    Subtotal                      600.00
    """


@pytest.fixture
def no_table_text() -> str:
    """Free text without a recognizable table header."""
    return """
    Dear customer,
    Please find attached our statement for work done last month.
    Kind regards
    """


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def engine(settings) -> ComplianceEngine:
    """Compliance engine built from default settings."""
    return ComplianceEngine(settings=settings)


@pytest.fixture
def standard_flags() -> ComplianceFlags:
    """Standard-rated supply, customer not an end user."""
    return ComplianceFlags(vat_category=VatCategory.STANDARD, end_user_confirmed=False)


@pytest.fixture
def sample_breakdown() -> InvoiceBreakdown:
    """Corrected invoice breakdown with labour and materials lines."""
    items = [
        LineItem(
            description="Carpentry labour",
            quantity=Decimal("2"),
            unit_price=Decimal("150.00"),
            vat_rate=Decimal("20"),
            vat_amount=Decimal("60.00"),
            line_total=Decimal("300.00"),
            vat_rate_assumed=True,
        ),
        LineItem(
            description="Timber <materials> & fixings",
            quantity=Decimal("1"),
            unit_price=Decimal("80.00"),
            vat_rate=Decimal("20"),
            vat_amount=Decimal("16.00"),
            line_total=Decimal("80.00"),
        ),
    ]
    cis = CisAssessment(
        applies=True,
        rate=Decimal("20"),
        labour_base=Decimal("300.00"),
        cis_amount=Decimal("60.00"),
    )

    return InvoiceBreakdown(items=items, totals=Totals.from_items(items, cis), cis_rate=Decimal("20"))
