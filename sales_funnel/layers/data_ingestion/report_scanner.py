"""
Operational Report Scanner

Walks a chat report line by line as a fold over an immutable ScanState:

    state_n+1 = scan_line(state_n, line_n)

The state carries the active team, the current salesperson, the person
map and the report date. Metric lines add to the current person's totals;
repeated mentions accumulate instead of overwriting.
"""

import logging
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Optional

from ...config.settings import ParserConfig
from ...core.entities import Person
from .classifier import PersonMarker, TeamMarker, classify_line, detect_report_date
from .extraction import extract_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanState:
    """Scan state after a given line. Never mutated; each step returns a new one."""
    active_team: str
    current_person: Optional[str] = None
    people: dict = field(default_factory=dict)
    team_labels: tuple = ()
    report_date: Optional[str] = None

    @classmethod
    def initial(cls, config: ParserConfig) -> "ScanState":
        return cls(active_team=config.unassigned_team)


def _strip_emphasis(line: str, config: ParserConfig) -> str:
    for marker in config.emphasis_markers:
        line = line.replace(marker, " ")
    return line


def scan_line(state: ScanState, line: str, config: ParserConfig) -> ScanState:
    """Apply one report line to *state*."""
    trimmed = line.strip()
    if not trimmed:
        return state

    report_date = detect_report_date(trimmed, config)
    if report_date:
        state = replace(state, report_date=report_date)

    kind = classify_line(trimmed, config)

    if isinstance(kind, TeamMarker):
        labels = state.team_labels
        if kind.name not in labels:
            labels = labels + (kind.name,)
        logger.debug("Team marker %r", kind.name)
        return replace(state, active_team=kind.name, current_person=None, team_labels=labels)

    if isinstance(kind, PersonMarker):
        people = state.people
        if kind.name not in people:
            people = {**people, kind.name: Person(name=kind.name, team=state.active_team)}
            logger.debug("New person %r on team %r", kind.name, state.active_team)
        return replace(state, current_person=kind.name, people=people)

    if state.current_person is None:
        return state

    delta = extract_metrics(_strip_emphasis(trimmed, config), config)
    if delta.is_empty:
        return state

    person = state.people[state.current_person].with_metrics(delta)
    return replace(state, people={**state.people, person.name: person})


def scan_report(text: str, config: ParserConfig = None) -> ScanState:
    """
    Scan a whole operational report.

    Args:
        text: Report pasted from the chat channel
        config: Parser vocabulary (defaults to ParserConfig())

    Returns:
        Final ScanState; `people` keeps the order of first appearance.
    """
    config = config or ParserConfig()
    lines = (text or "").splitlines()
    return reduce(
        lambda state, line: scan_line(state, line, config),
        lines,
        ScanState.initial(config)
    )
