"""Compliance check endpoints."""

import io
import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from ...core.models import ComplianceAssessment, ComplianceFlags, ComplianceReport
from ...core.pipeline import ComplianceEngine
from ...exporters import BaseExporter, CSVExporter, ExcelExporter, HTMLExporter
from ...normalizers import NarrativeAnalyzer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/compliance", tags=["compliance"])

EXPORTERS: dict[str, type[BaseExporter]] = {
    "csv": CSVExporter,
    "xlsx": ExcelExporter,
    "excel": ExcelExporter,
    "html": HTMLExporter,
}


class CheckRequest(BaseModel):
    """Invoice text plus the caller's compliance flags."""

    model_config = ConfigDict(populate_by_name=True)

    raw_text: str = Field(..., alias="rawText", description="Text extracted from the invoice")
    flags: ComplianceFlags = Field(default_factory=ComplianceFlags)


class CheckResponse(BaseModel):
    """Response envelope for a compliance check."""

    aiReply: ComplianceReport
    parserNote: str
    timestamp: datetime


def get_engine() -> ComplianceEngine:
    """Provide a compliance engine."""
    return ComplianceEngine()


def get_analyzer() -> NarrativeAnalyzer:
    """Provide a narrative analyser."""
    return NarrativeAnalyzer()


@router.post("/check", response_model=CheckResponse)
async def check_invoice(
    request: CheckRequest,
    engine: Annotated[ComplianceEngine, Depends(get_engine)],
) -> CheckResponse:
    """
    Run the rule-based VAT / DRC / CIS checks.

    Always returns a report; degraded and error reports are still 200.
    """
    report = engine.check(request.raw_text, request.flags)
    logger.info(f"Compliance check done, items skipped: {report.items_skipped}")

    return CheckResponse(
        aiReply=report,
        parserNote="Invoice checked by rule engine.",
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/assess")
async def assess_invoice(
    request: CheckRequest,
    engine: Annotated[ComplianceEngine, Depends(get_engine)],
) -> ComplianceAssessment:
    """Return the full assessment: items, decision, totals and report."""
    return engine.assess(request.raw_text, request.flags)


@router.post("/export/{format}")
async def export_corrected_invoice(
    format: str,
    request: CheckRequest,
    engine: Annotated[ComplianceEngine, Depends(get_engine)],
) -> StreamingResponse:
    """
    Export the corrected invoice breakdown.

    Supported formats:
    - csv: Comma-separated values
    - xlsx: Excel spreadsheet
    - html: Corrected invoice preview fragment
    """
    exporter_cls = EXPORTERS.get(format.lower())
    if exporter_cls is None:
        raise HTTPException(status_code=400, detail=f"Unsupported export format: {format}")

    assessment = engine.assess(request.raw_text, request.flags)
    if not assessment.structure_valid:
        raise HTTPException(
            status_code=422,
            detail="Invoice data incomplete - no corrected invoice available for export",
        )

    exporter = exporter_cls()
    content = exporter.export(assessment.breakdown)
    if isinstance(content, str):
        content = content.encode("utf-8")

    return StreamingResponse(
        io.BytesIO(content),
        media_type=exporter.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="corrected_invoice{exporter.file_extension}"'
        },
    )


@router.post("/analyse", response_model=CheckResponse)
async def analyse_invoice(
    request: CheckRequest,
    analyzer: Annotated[NarrativeAnalyzer, Depends(get_analyzer)],
) -> CheckResponse:
    """Run the LLM narrative analysis; same report shape as /check."""
    report = await analyzer.analyse(request.raw_text, request.flags)

    return CheckResponse(
        aiReply=report,
        parserNote="Invoice analysed by narrative model.",
        timestamp=datetime.now(timezone.utc),
    )
