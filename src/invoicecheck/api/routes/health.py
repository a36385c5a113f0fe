"""Health check endpoint."""

from fastapi import APIRouter

from ...config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns service status and version.
    """
    from invoicecheck import __version__

    return {
        "status": "healthy",
        "version": __version__,
        "service": "invoicecheck",
    }


@router.get("/ready")
async def readiness_check() -> dict:
    """
    Readiness check endpoint.

    The rule engine has no external dependencies; the narrative
    analysis needs an OpenAI key.
    """
    checks = {
        "api": True,
        "rule_engine": True,
        "narrative_analysis": bool(get_settings().openai_api_key),
    }

    return {
        "ready": checks["api"] and checks["rule_engine"],
        "checks": checks,
    }
