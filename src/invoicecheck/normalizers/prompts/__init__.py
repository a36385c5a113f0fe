"""LLM prompts for narrative compliance analysis."""

from .analysis import ANALYSIS_PROMPT, get_analysis_prompt

__all__ = [
    "ANALYSIS_PROMPT",
    "get_analysis_prompt",
]
