"""Configuration management using pydantic-settings."""

from decimal import Decimal
from functools import lru_cache
import json
from typing import Annotated, Iterable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI (narrative analysis only; the rule engine never calls out)
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model used for the narrative compliance analysis",
    )

    # Extraction limits
    table_scan_limit: int = Field(
        default=40,
        ge=1,
        le=500,
        description="Maximum number of lines scanned after the table header",
    )
    max_line_items: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum number of line items collected per invoice",
    )

    # Tax policy
    default_vat_rate: Decimal = Field(
        default=Decimal("20"),
        ge=0,
        le=100,
        description="VAT rate assumed for lines without an explicit VAT marker",
    )
    cis_rate: Decimal = Field(
        default=Decimal("20"),
        ge=0,
        le=100,
        description="CIS deduction rate applied to labour lines",
    )
    vat_tolerance: Decimal = Field(
        default=Decimal("0.02"),
        ge=0,
        description="Absolute tolerance when comparing printed and computed VAT",
    )

    # Server Settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)

    # CORS
    cors_allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Comma-separated list of allowed CORS origins",
    )

    @staticmethod
    def _split_csv(value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | Iterable[str]) -> list[str]:
        """Allow comma-separated env strings for CORS origins."""
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return []
            # Try JSON (e.g., '["https://foo"]'); if it fails, fall back to CSV.
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]
            return cls._split_csv(text)
        return list(value)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
