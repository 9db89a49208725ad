"""
Identity Resolution - linking ledger names to report persons

The operational report and the revenue ledger are typed by different
people, so the same salesperson may appear as "ERICA LIMA" in one and
"Lima" in the other.

This module provides:
- Name normalization shared by both parsers
- Exact and containment matching rules
- Reconciliation of ledger revenue into the person map
- Filtering of parsing artifacts (team labels, empty entities)

Known heuristic risk: containment can merge unrelated short names
(a ledger "ANA" matches an operational "MARIANA"). Matches are logged
with their confidence so such merges can be audited.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ...config.settings import ParserConfig
from ...core.entities import Metrics, Person

logger = logging.getLogger(__name__)

_MARKUP_RE = re.compile(r"[*_~:]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_name(raw: str) -> str:
    """
    Normalize a display name into an identity key.

    Examples:
        ' *Erica  Lima:* ' -> 'ERICA LIMA'
        '_matheus_' -> 'MATHEUS'
    """
    s = _MARKUP_RE.sub(" ", str(raw or ""))
    return _WHITESPACE_RE.sub(" ", s).strip().upper()


class MatchConfidence(Enum):
    """Confidence levels for name matches."""
    EXACT = "exact"             # Same normalized name
    CONTAINMENT = "containment" # One name contains the other
    NO_MATCH = "no_match"


@dataclass
class MatchResult:
    """Result of resolving one ledger name."""
    ledger_name: str = ""
    amount: float = 0.0
    matched_name: Optional[str] = None
    confidence: MatchConfidence = MatchConfidence.NO_MATCH
    synthesized: bool = False


class MatchingRule:
    """
    Base class for name matching rules.

    Rules are tried in order; the first one that finds a candidate wins.
    """

    confidence = MatchConfidence.NO_MATCH

    def match(self, name: str, candidates: list[str]) -> Optional[str]:
        """Return the first candidate matching *name*, or None."""
        raise NotImplementedError


class ExactNameMatch(MatchingRule):
    """Match on identical normalized names."""

    confidence = MatchConfidence.EXACT

    def match(self, name: str, candidates: list[str]) -> Optional[str]:
        return name if name in candidates else None


class ContainmentMatch(MatchingRule):
    """Match when either name is a substring of the other ("LIMA" / "ERICA LIMA")."""

    confidence = MatchConfidence.CONTAINMENT

    def match(self, name: str, candidates: list[str]) -> Optional[str]:
        for candidate in candidates:
            if name in candidate or candidate in name:
                return candidate
        return None


@dataclass
class ReconciliationResult:
    """Persons after merging the ledger, plus the audit trail."""
    people: tuple = ()
    matches: list = field(default_factory=list)
    discarded: tuple = ()


class IdentityResolver:
    """
    Merges ledger revenue into the operational person map.

    Every ledger amount ends up on exactly one person: an existing one
    (exact match first, then containment) or a new person on the
    unassigned team.
    """

    def __init__(self, config: ParserConfig = None, rules: list[MatchingRule] = None):
        self.config = config or ParserConfig()
        self._rules = rules or [ExactNameMatch(), ContainmentMatch()]

    def add_rule(self, rule: MatchingRule) -> None:
        """Append a matching rule, tried after the existing ones."""
        self._rules.append(rule)

    def resolve(self, name: str, candidates: list[str]) -> tuple[Optional[str], MatchConfidence]:
        """Find the person a ledger name refers to."""
        for rule in self._rules:
            matched = rule.match(name, candidates)
            if matched is not None:
                return matched, rule.confidence
        return None, MatchConfidence.NO_MATCH

    def reconcile(
        self,
        people: dict[str, Person],
        ledger: dict[str, float],
        team_labels: Iterable[str] = ()
    ) -> ReconciliationResult:
        """
        Attribute ledger amounts to persons and drop parsing artifacts.

        Args:
            people: Persons from the operational report, in scan order
            ledger: Normalized name -> amount, in ledger order
            team_labels: Team names seen in the report

        Returns:
            ReconciliationResult with the surviving persons in order
        """
        labels = set(team_labels) | {self.config.unassigned_team}
        merged = dict(people)
        matches = []

        for ledger_name, amount in ledger.items():
            # Synthesized persons only match their own name again
            candidates = [
                name for name in merged
                if name not in labels and (name in people or name == ledger_name)
            ]
            matched, confidence = self.resolve(ledger_name, candidates)

            if matched is None:
                if ledger_name in merged:
                    # Named like a team; dropped by the artifact filter below
                    merged[ledger_name] = merged[ledger_name].with_revenue(amount)
                else:
                    merged[ledger_name] = Person(
                        name=ledger_name,
                        team=self.config.unassigned_team,
                        metrics=Metrics(revenue=amount)
                    )
                matches.append(MatchResult(
                    ledger_name=ledger_name,
                    amount=amount,
                    matched_name=ledger_name,
                    synthesized=True
                ))
                logger.debug("Ledger name %r has no report match; created on %r",
                             ledger_name, self.config.unassigned_team)
                continue

            merged[matched] = merged[matched].with_revenue(amount)
            matches.append(MatchResult(
                ledger_name=ledger_name,
                amount=amount,
                matched_name=matched,
                confidence=confidence
            ))
            if confidence == MatchConfidence.CONTAINMENT:
                logger.info("Ledger name %r attributed to %r by containment",
                            ledger_name, matched)

        kept = []
        discarded = []
        for person in merged.values():
            if person.name in labels or person.metrics.is_empty:
                discarded.append(person)
                if person.metrics.revenue:
                    logger.warning("Discarding %r (team label) with revenue %.2f",
                                   person.name, person.metrics.revenue)
                continue
            kept.append(person)

        return ReconciliationResult(
            people=tuple(kept),
            matches=matches,
            discarded=tuple(discarded)
        )


def reconcile(
    people: dict[str, Person],
    ledger: dict[str, float],
    team_labels: Iterable[str] = (),
    config: ParserConfig = None
) -> tuple:
    """Convenience wrapper returning only the reconciled persons."""
    return IdentityResolver(config).reconcile(people, ledger, team_labels).people
