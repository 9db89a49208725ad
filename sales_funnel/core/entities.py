"""
Core Funnel Entities

This module defines the value objects produced by the report parser.
All of them are immutable: a ReportResult is built once per parse call
and never mutated afterwards.

Entities:
- Metrics: the six funnel values of a person, team or the whole report
- Efficiency: upstream/downstream ratios at each funnel transition
- Person: a salesperson with team affiliation and metrics
- Team: an ordered group of persons with summed metrics
- ReportResult: the reconciled report consumed by the presentation layer
"""

from dataclasses import dataclass, field, fields, replace
from decimal import Decimal, ROUND_HALF_UP


def calculate_ratio(numerator: float, denominator: float) -> float:
    """Upstream ÷ downstream rounded to one decimal place; 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    value = Decimal(str(numerator / denominator))
    return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Metrics:
    """
    Funnel counts plus revenue (VGV).

    Counts are non-negative integers; revenue is a non-negative float in
    the currency of the ledger.
    """
    ads: int = 0
    calls: int = 0
    appointments: int = 0
    visits: int = 0
    closings: int = 0
    revenue: float = 0.0

    def __add__(self, other: "Metrics") -> "Metrics":
        if not isinstance(other, Metrics):
            return NotImplemented
        return Metrics(
            ads=self.ads + other.ads,
            calls=self.calls + other.calls,
            appointments=self.appointments + other.appointments,
            visits=self.visits + other.visits,
            closings=self.closings + other.closings,
            revenue=self.revenue + other.revenue
        )

    def add_revenue(self, amount: float) -> "Metrics":
        return replace(self, revenue=self.revenue + amount)

    @property
    def is_empty(self) -> bool:
        """True when every count and the revenue are zero."""
        return all(getattr(self, f.name) == 0 for f in fields(self))

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Efficiency:
    """Conversion effort at each funnel transition (how many X per Y)."""
    ads_to_call: float = 0.0
    call_to_appointment: float = 0.0
    appointment_to_visit: float = 0.0
    visit_to_closing: float = 0.0

    @classmethod
    def from_metrics(cls, metrics: Metrics) -> "Efficiency":
        return cls(
            ads_to_call=calculate_ratio(metrics.ads, metrics.calls),
            call_to_appointment=calculate_ratio(metrics.calls, metrics.appointments),
            appointment_to_visit=calculate_ratio(metrics.appointments, metrics.visits),
            visit_to_closing=calculate_ratio(metrics.visits, metrics.closings)
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Person:
    """
    A salesperson identified by normalized display name.

    Created when the operational report introduces the name, or when the
    ledger mentions a name with no operational match.
    """
    name: str
    team: str
    metrics: Metrics = field(default_factory=Metrics)

    @property
    def efficiency(self) -> Efficiency:
        return Efficiency.from_metrics(self.metrics)

    def with_metrics(self, delta: Metrics) -> "Person":
        """Return a copy with *delta* accumulated into the metrics."""
        return replace(self, metrics=self.metrics + delta)

    def with_revenue(self, amount: float) -> "Person":
        return replace(self, metrics=self.metrics.add_revenue(amount))


@dataclass(frozen=True)
class Team:
    """A team with its persons in order of first appearance."""
    name: str
    people: tuple = ()
    totals: Metrics = field(default_factory=Metrics)
    efficiency: Efficiency = field(default_factory=Efficiency)


@dataclass(frozen=True)
class ReportResult:
    """
    Reconciled funnel report.

    Persons and teams keep insertion order (first appearance in the
    operational report, then ledger-only names). Callers that need a
    ranking must sort on their own.
    """
    report_date: str
    people: tuple = ()
    teams: tuple = ()
    totals: Metrics = field(default_factory=Metrics)
    efficiency: Efficiency = field(default_factory=Efficiency)
    avg_revenue_per_closing: float = 0.0
    avg_revenue_per_person: float = 0.0

    def get_person(self, name: str):
        """Look up a person by normalized name (None when absent)."""
        for person in self.people:
            if person.name == name:
                return person
        return None

    def get_team(self, name: str):
        """Look up a team by normalized name (None when absent)."""
        for team in self.teams:
            if team.name == name:
                return team
        return None
