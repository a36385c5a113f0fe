"""Labour vs. materials classification for CIS."""

import re

# Construction trade and labour vocabulary (CIS-relevant work)
LABOUR_TERMS: list[str] = [
    "labour", "labor",
    "groundworks", "site preparation", "site clearance", "excavation",
    "earth moving", "foundations", "footings",
    "bricklaying", "brickwork", "blockwork", "concrete",
    "masonry", "steel fixing", "formwork", "shuttering",
    "carpentry", "carpenter", "joinery", "joiner",
    "first fix", "second fix",
    "electrical installation", "wiring install", "install lighting", "installation",
    "pipework", "plumbing", "boiler installation", "cylinder installation",
    "roofing", "reroof", "roof repairs",
    "paving", "slabbing", "fencing install", "decking install", "retaining wall",
    "demolition", "strip out", "dismantling",
    "scaffold", "scaffolding", "erection",
    "painting", "decorating", "building maintenance", "repairs to",
]

# Time-based markers only count as whole words ("hr" must not match "three")
LABOUR_MARKERS: list[str] = ["day", "days", "hr", "hrs", "hour", "hours"]

MATERIAL_TERMS: list[str] = [
    "material", "materials", "timber", "plasterboard", "screws",
    "fixings", "paint", "consumables", "adhesive", "sealant",
    "tiles", "roofing felt", "upvc", "copper pipe",
    "boiler", "cylinder", "lighting unit", "accessories",
]


def _vocabulary_pattern(terms: list[str], markers: list[str] | None = None) -> re.Pattern:
    parts = [r"\b" + re.escape(term) for term in terms]
    parts += [r"\b" + re.escape(marker) + r"\b" for marker in markers or []]
    if not parts:
        return re.compile(r"(?!)")
    return re.compile("|".join(parts), re.IGNORECASE)


class LabourClassifier:
    """
    Keyword classifier for labour-bearing descriptions.

    A pure membership test, no scoring. CIS arithmetic keys off
    is_labour alone; the materials vocabulary only feeds VAT narrative.
    """

    def __init__(
        self,
        labour_terms: list[str] | None = None,
        labour_markers: list[str] | None = None,
        material_terms: list[str] | None = None,
    ):
        trade_terms = labour_terms if labour_terms is not None else LABOUR_TERMS
        self._labour_re = _vocabulary_pattern(
            trade_terms,
            labour_markers if labour_markers is not None else LABOUR_MARKERS,
        )
        # Trade vocabulary without time markers, for whole documents
        self._trade_re = _vocabulary_pattern(trade_terms)
        self._materials_re = _vocabulary_pattern(
            material_terms if material_terms is not None else MATERIAL_TERMS,
        )

    def is_labour(self, description: str) -> bool:
        """Check if a line description names labour or a construction trade."""
        return bool(self._labour_re.search(description or ""))

    def has_labour_signals(self, text: str) -> bool:
        """Check if a whole document names labour or a trade, ignoring time markers."""
        return bool(self._trade_re.search(text or ""))

    def is_materials(self, description: str) -> bool:
        """Check if a description (or a whole document) names materials."""
        return bool(self._materials_re.search(description or ""))
