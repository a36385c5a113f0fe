"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.middleware.error_handler import setup_error_handlers
from .api.routes import compliance_router, health_router
from .config import get_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="InvoiceCheck API",
        description=(
            "UK construction invoice compliance checks: VAT rate, domestic "
            "reverse charge and CIS deduction, with a corrected invoice preview."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_error_handlers(app)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(compliance_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "InvoiceCheck API",
            "version": __version__,
            "docs": "/docs",
        }

    logger.info(f"InvoiceCheck API configured, debug mode: {settings.debug}")
    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "invoicecheck.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
