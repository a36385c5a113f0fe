"""Pydantic models for compliance inputs, intermediate results and the report."""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VatCategory(str, Enum):
    """VAT category declared by the caller."""

    ZERO_RATED_NEW_BUILD = "zero-rated-new-build"
    REDUCED_5 = "reduced-5"
    STANDARD = "standard"


class ComplianceFlags(BaseModel):
    """Caller-supplied decision inputs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    vat_category: VatCategory = Field(default=VatCategory.STANDARD, alias="vatCategory")
    end_user_confirmed: bool = Field(
        default=False,
        alias="endUserConfirmed",
        description="Customer declared itself an end user or intermediary",
    )
    cis_rate: Decimal = Field(default=Decimal("20"), ge=0, le=100, alias="cisRate")

    @field_validator("vat_category", mode="before")
    @classmethod
    def parse_vat_category(cls, value: Any) -> VatCategory:
        """Unknown categories fall back to the standard rate."""
        if isinstance(value, VatCategory):
            return value
        try:
            return VatCategory(str(value or "").strip().lower())
        except ValueError:
            return VatCategory.STANDARD

    @field_validator("end_user_confirmed", mode="before")
    @classmethod
    def parse_end_user_confirmed(cls, value: Any) -> bool:
        """Form posts send "true"/"false" strings."""
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)


class LineItem(BaseModel):
    """Invoice line item recovered from the table region."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal = Field(..., description="VAT rate percentage")
    vat_amount: Decimal = Field(default=Decimal("0"))
    line_total: Decimal = Field(..., description="quantity x unit price, before VAT")
    vat_rate_assumed: bool = Field(
        default=False,
        description="No VAT marker on the line, the configured default rate was used",
    )


class VatDecision(BaseModel):
    """Outcome of the VAT / DRC decision rules."""

    model_config = ConfigDict(frozen=True)

    vat_rate: Decimal
    vat_label: str
    drc_applies: bool
    reason: str
    new_build: bool = False


class CisAssessment(BaseModel):
    """CIS deduction over labour-classified lines."""

    model_config = ConfigDict(frozen=True)

    applies: bool
    rate: Decimal
    labour_base: Decimal = Field(default=Decimal("0"))
    cis_amount: Decimal = Field(default=Decimal("0"))


class Totals(BaseModel):
    """Invoice totals derived from the line items."""

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = Field(default=Decimal("0"), description="Sum of line totals before VAT")
    vat_total: Decimal = Field(default=Decimal("0"))
    labour_base: Decimal = Field(default=Decimal("0"))
    cis_amount: Decimal = Field(default=Decimal("0"))
    gross: Decimal = Field(default=Decimal("0"), description="subtotal + VAT")
    total_due: Decimal = Field(default=Decimal("0"), description="gross - CIS")

    @classmethod
    def from_items(cls, items: list[LineItem], cis: CisAssessment) -> "Totals":
        """Compute totals for a line item sequence."""
        subtotal = sum((item.line_total for item in items), Decimal("0"))
        vat_total = sum((item.vat_amount for item in items), Decimal("0"))
        gross = subtotal + vat_total
        return cls(
            subtotal=subtotal,
            vat_total=vat_total,
            labour_base=cis.labour_base,
            cis_amount=cis.cis_amount,
            gross=gross,
            total_due=gross - cis.cis_amount,
        )


class PrintedTotals(BaseModel):
    """Footer figures as printed on the invoice, None when absent."""

    model_config = ConfigDict(frozen=True)

    net: Decimal | None = Field(default=None, description="Printed subtotal / net total")
    vat: Decimal | None = None
    total: Decimal | None = Field(default=None, description="Printed total or amount due")

    @property
    def found(self) -> bool:
        return any(value is not None for value in (self.net, self.vat, self.total))


class InvoiceBreakdown(BaseModel):
    """Line items plus totals, the input of every exporter."""

    model_config = ConfigDict(frozen=True)

    items: list[LineItem] = Field(default_factory=list)
    totals: Totals = Field(default_factory=Totals)
    cis_rate: Decimal = Field(default=Decimal("20"))


class ComplianceReport(BaseModel):
    """
    The externally visible compliance result.

    The same shape is produced by the rule engine and by the narrative
    analyser, so consumers can treat both interchangeably.
    """

    model_config = ConfigDict(frozen=True)

    vat_check: str
    cis_check: str
    required_wording: str
    summary: str
    corrected_invoice: str | None = None
    items_skipped: int = Field(default=0, ge=0, description="Table lines that could not be parsed")


class ComplianceAssessment(BaseModel):
    """Full result of one engine run: every intermediate plus the report."""

    model_config = ConfigDict(frozen=True)

    table_found: bool
    items: list[LineItem] = Field(default_factory=list)
    items_skipped: int = 0
    decision: VatDecision | None = None
    reverse_charge_wording: bool = False
    has_labour: bool = False
    has_materials: bool = False
    cis: CisAssessment | None = None
    totals: Totals = Field(default_factory=Totals)
    printed_totals: PrintedTotals = Field(default_factory=PrintedTotals)
    structure_valid: bool = False
    validation_errors: list[str] = Field(default_factory=list)
    validation_warnings: list[str] = Field(default_factory=list)
    report: ComplianceReport

    @property
    def breakdown(self) -> InvoiceBreakdown:
        """Items and totals for export."""
        return InvoiceBreakdown(
            items=self.items,
            totals=self.totals,
            cis_rate=self.cis.rate if self.cis else Decimal("20"),
        )
