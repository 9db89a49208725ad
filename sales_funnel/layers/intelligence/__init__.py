"""
Layer 2: Intelligence

LLM-backed narrative diagnosis of a parsed funnel report. The parser
core never depends on this layer.
"""

from .diagnosis import (
    FunnelDiagnosisEngine,
    build_prompt_variables,
    format_currency,
    split_paragraphs
)

__all__ = [
    "FunnelDiagnosisEngine",
    "build_prompt_variables",
    "format_currency",
    "split_paragraphs"
]
