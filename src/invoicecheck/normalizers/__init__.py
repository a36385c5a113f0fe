"""Narrative (LLM) analysis and reply normalization."""

from .llm_analyzer import ContextProvider, NarrativeAnalyzer
from .replies import NarrativeReply, PlainTextReply, StructuredReply, parse_reply, to_report

__all__ = [
    "ContextProvider",
    "NarrativeAnalyzer",
    "NarrativeReply",
    "PlainTextReply",
    "StructuredReply",
    "parse_reply",
    "to_report",
]
