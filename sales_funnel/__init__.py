"""
Sales Funnel Reconciler

Parses a funnel report copy-pasted from a sales team's chat group and a
freeform revenue ledger into per-salesperson and per-team performance:
ads -> calls -> appointments -> visits -> closings, plus revenue (VGV).
"""

__version__ = "0.1.0"

from .use_cases.report_parsing import parse_report

__all__ = ["parse_report"]
