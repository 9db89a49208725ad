"""
Funnel Metrics Calculator

Rolls person metrics up into team and global totals:
- Six summed values per team and for the whole report
- Efficiency ratios at each funnel transition
- Average revenue per closing (ticket médio)
- Average revenue per salesperson
"""

from typing import Iterable

from ..core.entities import Efficiency, Metrics, Person, ReportResult, Team


class FunnelCalculator:
    """
    Builds a ReportResult from reconciled persons.

    Teams appear in order of their first person; persons keep their
    input order inside each team.
    """

    def sum_metrics(self, people: Iterable[Person]) -> Metrics:
        """Sum the metric bundles of *people*."""
        total = Metrics()
        for person in people:
            total = total + person.metrics
        return total

    def group_by_team(self, people: Iterable[Person]) -> list[Team]:
        """Group persons by team and derive each team's totals."""
        members: dict[str, list[Person]] = {}
        for person in people:
            members.setdefault(person.team, []).append(person)

        teams = []
        for name, team_people in members.items():
            totals = self.sum_metrics(team_people)
            teams.append(Team(
                name=name,
                people=tuple(team_people),
                totals=totals,
                efficiency=Efficiency.from_metrics(totals)
            ))
        return teams

    def average_ticket(self, totals: Metrics) -> float:
        """Revenue per closing; the revenue itself when nothing closed."""
        if totals.closings == 0:
            return totals.revenue
        return totals.revenue / totals.closings

    def average_per_person(self, totals: Metrics, person_count: int) -> float:
        """Revenue per salesperson; the revenue itself with no persons."""
        if person_count == 0:
            return totals.revenue
        return totals.revenue / person_count

    def aggregate(self, people: Iterable[Person], report_date: str) -> ReportResult:
        """Compute team and global rollups."""
        people = tuple(people)
        totals = self.sum_metrics(people)

        return ReportResult(
            report_date=report_date,
            people=people,
            teams=tuple(self.group_by_team(people)),
            totals=totals,
            efficiency=Efficiency.from_metrics(totals),
            avg_revenue_per_closing=self.average_ticket(totals),
            avg_revenue_per_person=self.average_per_person(totals, len(people))
        )


def aggregate(people: Iterable[Person], report_date: str) -> ReportResult:
    """Convenience wrapper around FunnelCalculator.aggregate."""
    return FunnelCalculator().aggregate(people, report_date)


def rank_people(people: Iterable[Person], key: str = "revenue", descending: bool = True) -> list[Person]:
    """
    Sort persons by one metric (e.g. for a revenue leaderboard).

    Ties keep their original order.
    """
    if key not in Metrics.__dataclass_fields__:
        raise ValueError(f"Unknown metric: {key}")
    return sorted(people, key=lambda p: getattr(p.metrics, key), reverse=descending)
