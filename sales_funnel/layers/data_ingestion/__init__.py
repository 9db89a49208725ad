"""
Layer 1: Data Ingestion

Sources:
- Operational funnel report copy-pasted from a chat group
- Revenue ledger (VGV) typed as "name: amount" lines

Both are freeform; every parser here degrades to zero/default values
instead of raising on malformed lines.
"""

from .extraction import extract_metric_value, extract_metrics
from .ledger import parse_amount, parse_ledger
from .classifier import (
    TeamMarker,
    PersonMarker,
    Noise,
    classify_line,
    detect_report_date
)
from .report_scanner import ScanState, scan_line, scan_report
from .identity_resolution import (
    IdentityResolver,
    MatchConfidence,
    MatchResult,
    ReconciliationResult,
    normalize_name,
    reconcile
)

__all__ = [
    "extract_metric_value",
    "extract_metrics",
    "parse_amount",
    "parse_ledger",
    "TeamMarker",
    "PersonMarker",
    "Noise",
    "classify_line",
    "detect_report_date",
    "ScanState",
    "scan_line",
    "scan_report",
    "IdentityResolver",
    "MatchConfidence",
    "MatchResult",
    "ReconciliationResult",
    "normalize_name",
    "reconcile"
]
