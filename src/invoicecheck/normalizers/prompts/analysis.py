"""Narrative compliance analysis prompt."""

ANALYSIS_PROMPT = """You are a UK accounting compliance expert (HMRC CIS & VAT).

Use BOTH sources of information below.

## 1) Reference knowledge:

{knowledge_context}

## 2) Rule-based findings and user flags:

- VAT category: {vat_label}
- DRC applies: {drc_applies}
- CIS rate: {cis_rate}%
- Reason: {reason}

---

## Your tasks:

1. Check VAT & Domestic Reverse Charge treatment.
2. Check the CIS calculation on labour (CIS never applies to materials).
3. Identify missing statutory wording.
4. Provide corrected invoice wording & compliance notes.
5. Return valid JSON with exactly these keys:

```json
{{
  "vat_check": "string",
  "cis_check": "string",
  "required_wording": "string",
  "summary": "string",
  "corrected_invoice": "string or null"
}}
```

## Invoice text:

{invoice_text}

Return ONLY the JSON object, no additional text or explanation."""


def get_analysis_prompt(
    invoice_text: str,
    vat_label: str,
    drc_applies: bool,
    cis_rate: str,
    reason: str,
    knowledge_context: str = "",
) -> str:
    """
    Generate the narrative analysis prompt.

    Args:
        invoice_text: Raw invoice text
        vat_label: Label of the rule-based VAT decision
        drc_applies: Whether the rule-based decision allows DRC
        cis_rate: CIS rate percentage as shown to the model
        reason: Reason given by the VAT decision
        knowledge_context: Optional reference material

    Returns:
        Complete prompt for LLM
    """
    return ANALYSIS_PROMPT.format(
        knowledge_context=knowledge_context.strip() or "(none available)",
        vat_label=vat_label,
        drc_applies="Yes" if drc_applies else "No",
        cis_rate=cis_rate,
        reason=reason,
        invoice_text=invoice_text,
    )
