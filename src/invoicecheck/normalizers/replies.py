"""Normalization of narrative analysis replies into the report shape."""

import json
import logging
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from ..core.models import ComplianceReport
from ..core.report import ReportComposer

logger = logging.getLogger(__name__)

NO_VAT_RE = re.compile(r"No VAT", re.IGNORECASE)
NOT_PROVIDED = "Not provided by analysis."
REPORT_FIELDS = ("vat_check", "cis_check", "required_wording", "summary")


class StructuredReply(BaseModel):
    """Reply that decoded to a JSON object."""

    kind: Literal["structured"] = "structured"
    payload: dict[str, Any]


class PlainTextReply(BaseModel):
    """Reply that is free text (or JSON that is not an object)."""

    kind: Literal["plain_text"] = "plain_text"
    text: str


NarrativeReply = Annotated[Union[StructuredReply, PlainTextReply], Field(discriminator="kind")]


def parse_reply(content: Any) -> NarrativeReply:
    """
    Classify raw reply content.

    Args:
        content: Message content string, an already decoded object, or None

    Returns:
        StructuredReply for JSON objects, PlainTextReply otherwise
    """
    if isinstance(content, dict):
        return StructuredReply(payload=content)
    if content is None:
        return PlainTextReply(text="")

    text = str(content).strip()
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return PlainTextReply(text=text)

    if isinstance(decoded, dict):
        return StructuredReply(payload=decoded)
    if isinstance(decoded, str):
        return PlainTextReply(text=decoded.strip())
    return PlainTextReply(text=text)


def to_report(reply: NarrativeReply) -> ComplianceReport:
    """
    Normalize any reply into a ComplianceReport.

    Structured replies carrying an "error" key become the error report.
    """
    if isinstance(reply, PlainTextReply):
        if not reply.text:
            logger.warning("Narrative analysis returned an empty reply")
            return ReportComposer.error_report()
        return ComplianceReport(
            vat_check=NOT_PROVIDED,
            cis_check=NOT_PROVIDED,
            required_wording=NOT_PROVIDED,
            summary=reply.text,
            corrected_invoice=None,
        )

    payload = reply.payload
    if payload.get("error"):
        logger.error(f"Narrative analysis reported an error: {payload['error']}")
        return ReportComposer.error_report()

    fields = {name: _as_text(payload.get(name)) or NOT_PROVIDED for name in REPORT_FIELDS}

    corrected = _as_text(payload.get("corrected_invoice")) or None
    if corrected:
        corrected = NO_VAT_RE.sub("Zero-rated (0 %)", corrected)

    return ComplianceReport(**fields, corrected_invoice=corrected)


def _as_text(value: Any) -> str:
    """Flatten nested reply values into display text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return "\n".join(_as_text(v) for v in value if v is not None)
    if isinstance(value, dict):
        return json.dumps(value, indent=2, default=str)
    return str(value)
