"""
Use Case Implementations

Use Case 1: Reconcile the chat funnel report with the revenue ledger
Use Case 2: Optional LLM diagnosis of the reconciled report
"""

from .report_parsing import FunnelAnalysis, FunnelAnalysisUseCase, parse_report

__all__ = [
    "FunnelAnalysis",
    "FunnelAnalysisUseCase",
    "parse_report"
]
