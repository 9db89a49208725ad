"""
Core domain models for the sales funnel report.

The funnel tracked per salesperson is ad -> call -> appointment -> visit
-> closing, plus the revenue (VGV) booked by each person.
"""

from .entities import (
    Metrics,
    Efficiency,
    Person,
    Team,
    ReportResult,
    calculate_ratio
)

__all__ = [
    "Metrics",
    "Efficiency",
    "Person",
    "Team",
    "ReportResult",
    "calculate_ratio"
]
