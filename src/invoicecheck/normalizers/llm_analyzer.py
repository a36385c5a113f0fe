"""Narrative compliance analysis using OpenAI."""

import logging
from typing import Any, Awaitable, Callable

from openai import AsyncOpenAI

from ..config import get_settings
from ..core.models import ComplianceFlags, ComplianceReport
from ..core.report import ReportComposer
from ..rules import TaxRuleEngine
from ..utils.numbers import format_quantity
from .prompts import get_analysis_prompt
from .replies import parse_reply, to_report

logger = logging.getLogger(__name__)

# Async lookup of reference material for a piece of invoice text
ContextProvider = Callable[[str], Awaitable[str]]


class NarrativeAnalyzer:
    """
    Secondary, non-deterministic compliance analysis by an LLM.

    Produces the same ComplianceReport shape as the rule engine. Any
    knowledge lookup is injected explicitly; nothing is cached globally.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        context_provider: ContextProvider | None = None,
        tax_rules: TaxRuleEngine | None = None,
        client: Any | None = None,
    ):
        """
        Initialize narrative analyser.

        Args:
            api_key: OpenAI API key. If None, uses settings.
            model: Model to use. If None, uses settings.
            context_provider: Optional async knowledge lookup
            tax_rules: Rule engine used for the VAT decision fed to the prompt
            client: Pre-built OpenAI-compatible client (tests)
        """
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.llm_model
        self.context_provider = context_provider
        self.tax_rules = tax_rules or TaxRuleEngine(cis_rate=settings.cis_rate)
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def analyse(self, raw_text: str, flags: ComplianceFlags | None = None) -> ComplianceReport:
        """
        Analyse invoice text and normalize the reply.

        Args:
            raw_text: Text extracted from the invoice
            flags: Caller-supplied compliance flags

        Returns:
            ComplianceReport; the error report if the call or reply fails
        """
        flags = flags or ComplianceFlags()
        decision = self.tax_rules.decide_vat(raw_text, flags)
        knowledge_context = await self._get_context(raw_text)

        prompt = get_analysis_prompt(
            invoice_text=raw_text,
            vat_label=decision.vat_label,
            drc_applies=decision.drc_applies,
            cis_rate=format_quantity(flags.cis_rate),
            reason=decision.reason,
            knowledge_context=knowledge_context,
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": "You are a UK VAT and CIS compliance assistant. Return only valid JSON.",
                    },
                    {"role": "user", "content": prompt},
                ],
                temperature=0.1,
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content
        except Exception as e:
            logger.error(f"Narrative analysis failed: {e}")
            return ReportComposer.error_report()

        return to_report(parse_reply(content))

    async def _get_context(self, raw_text: str) -> str:
        """Fetch reference material; a failing lookup yields no context."""
        if self.context_provider is None:
            return ""
        try:
            return await self.context_provider(raw_text) or ""
        except Exception as e:
            logger.error(f"Knowledge context lookup failed: {e}")
            return ""
