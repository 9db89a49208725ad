"""
Metrics and Aggregation

Team and global rollups of the funnel:
ads -> calls -> appointments -> visits -> closings, plus revenue.
"""

from .calculator import FunnelCalculator, aggregate, rank_people

__all__ = [
    "FunnelCalculator",
    "aggregate",
    "rank_people"
]
