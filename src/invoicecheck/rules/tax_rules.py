"""UK VAT, Domestic Reverse Charge and CIS decision rules."""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal

from ..classifiers import LabourClassifier
from ..core.models import CisAssessment, ComplianceFlags, LineItem, VatCategory, VatDecision
from ..validators.structure_validator import ValidationResult

logger = logging.getLogger(__name__)

# UK VAT rates (standard, reduced, zero)
UK_VAT_RATES: list[Decimal] = [Decimal("20"), Decimal("5"), Decimal("0")]

# UK VAT registration number: 9 or 12 digits, or GD/HA plus 3 digits
GB_VAT_ID_PATTERN = r"^GB(\d{9}|\d{12}|(GD|HA)\d{3})$"
VAT_ID_CANDIDATE_RE = re.compile(
    r"\bGB ?(?:\d{3} ?\d{4} ?\d{2}(?: ?\d{3})?|\d+|(?:GD|HA)\d+)\b"
)

NEW_BUILD_RE = re.compile(
    r"new[\s-]build|new dwelling|\bplot\s*\d+|\bnhbc\b|completion certificate|\bcml\b",
    re.IGNORECASE,
)
REDUCED_RATE_RE = re.compile(r"reduced rate|(?<![\d.])5(?:\.0+)?\s?%", re.IGNORECASE)
REVERSE_CHARGE_RE = re.compile(
    r"domestic reverse charge|reverse[\s-]charge|section 55a|vat act 1994",
    re.IGNORECASE,
)

CENT = Decimal("0.01")


class TaxRuleEngine:
    """
    Apply VAT category, DRC eligibility and CIS deduction rules.

    VAT/DRC rules follow statutory precedence, first match wins:
    new build, then reduced rate, then standard rate.
    """

    def __init__(self, cis_rate: Decimal = Decimal("20"), classifier: LabourClassifier | None = None):
        self.cis_rate = cis_rate
        self.classifier = classifier or LabourClassifier()

    def decide_vat(self, text: str, flags: ComplianceFlags) -> VatDecision:
        """
        Decide the VAT rate and whether DRC can apply.

        Args:
            text: Raw invoice text
            flags: Caller-supplied compliance flags

        Returns:
            VatDecision
        """
        text = text or ""

        if flags.vat_category == VatCategory.ZERO_RATED_NEW_BUILD or NEW_BUILD_RE.search(text):
            return VatDecision(
                vat_rate=Decimal("0"),
                vat_label="Zero-rated (new build dwelling)",
                drc_applies=False,
                reason="New build dwelling → zero-rated; DRC excluded.",
                new_build=True,
            )

        reduced = flags.vat_category == VatCategory.REDUCED_5 or bool(REDUCED_RATE_RE.search(text))

        if flags.end_user_confirmed:
            reason = "End-user/intermediary declared → DRC excluded."
        else:
            reason = "Standard/reduced-rated supply → DRC may apply."

        return VatDecision(
            vat_rate=Decimal("5") if reduced else Decimal("20"),
            vat_label="Reduced rate 5%" if reduced else "Standard rate 20%",
            drc_applies=not flags.end_user_confirmed,
            reason=reason,
        )

    def detect_reverse_charge(self, text: str) -> bool:
        """Check for reverse-charge wording already printed on the invoice."""
        return bool(REVERSE_CHARGE_RE.search(text or ""))

    def compute_cis(self, items: list[LineItem]) -> CisAssessment:
        """
        Compute the CIS deduction over labour-classified lines.

        applies is False only when no line is labour, so a labour total
        that happens to be zero is still reported as a computed deduction.
        """
        labour_items = [item for item in items if self.classifier.is_labour(item.description)]
        labour_base = sum((item.line_total for item in labour_items), Decimal("0"))
        cis_amount = (labour_base * self.cis_rate / Decimal("100")).quantize(CENT, rounding=ROUND_HALF_UP)

        return CisAssessment(
            applies=bool(labour_items),
            rate=self.cis_rate,
            labour_base=labour_base,
            cis_amount=cis_amount,
        )

    def check_line_rates(self, items: list[LineItem]) -> ValidationResult:
        """Warn about line VAT rates that are not UK rates."""
        warnings = []
        for number, item in enumerate(items, start=1):
            if item.vat_rate not in UK_VAT_RATES:
                warnings.append(
                    f"Line {number}: VAT rate {item.vat_rate}% is not a UK VAT rate. "
                    f"UK rates: {', '.join(str(r) + '%' for r in UK_VAT_RATES)}"
                )
        return ValidationResult(is_valid=True, warnings=warnings)

    def check_vat_numbers(self, text: str) -> ValidationResult:
        """Warn about GB VAT registration numbers with an invalid format."""
        warnings = []
        for candidate in VAT_ID_CANDIDATE_RE.findall(text or ""):
            vat_id = candidate.upper().replace(" ", "")
            if not re.match(GB_VAT_ID_PATTERN, vat_id):
                warnings.append(f"VAT number '{candidate.strip()}' may have invalid format")
        return ValidationResult(is_valid=True, warnings=warnings)
