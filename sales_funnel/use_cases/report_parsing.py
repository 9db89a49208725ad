"""
Use Case 1: Funnel Report Reconciliation

Pipeline:
1. Ledger parsing (name -> revenue)
2. Operational report scan (teams, persons, funnel counts, date)
3. Identity resolution (ledger names -> report persons)
4. Aggregation (team and global totals, efficiency, averages)

Steps 1 and 2 are independent; the same input text always yields the
same ReportResult (given the same `today`).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional

from ..config.settings import ParserConfig
from ..core.entities import ReportResult
from ..layers.data_ingestion.identity_resolution import IdentityResolver
from ..layers.data_ingestion.ledger import parse_ledger
from ..layers.data_ingestion.report_scanner import scan_report
from ..metrics.calculator import FunnelCalculator

if TYPE_CHECKING:
    from ..layers.intelligence.diagnosis import FunnelDiagnosisEngine


def parse_report(
    raw_text: str,
    ledger_text: str,
    *,
    config: ParserConfig = None,
    today: Optional[date] = None
) -> ReportResult:
    """
    Reconcile an operational report with a revenue ledger.

    Args:
        raw_text: Funnel report pasted from the chat group
        ledger_text: Revenue (VGV) per salesperson
        config: Parser vocabulary (defaults to ParserConfig())
        today: Date used when the report carries none

    Returns:
        Immutable ReportResult. Malformed lines never raise; they
        simply contribute nothing.
    """
    config = config or ParserConfig()

    ledger = parse_ledger(ledger_text, config)
    state = scan_report(raw_text, config)

    reconciled = IdentityResolver(config).reconcile(
        state.people,
        ledger,
        team_labels=state.team_labels
    )

    report_date = state.report_date or (today or date.today()).strftime(config.date_format)
    return FunnelCalculator().aggregate(reconciled.people, report_date)


@dataclass
class FunnelAnalysis:
    """Parsed report plus the optional narrative diagnosis."""
    report: ReportResult = None
    diagnosis: Optional[str] = None
    warnings: list = field(default_factory=list)


class FunnelAnalysisUseCase:
    """
    Parses a report and, on request, asks the LLM for a diagnosis.

    Flow:
    1. Parse and reconcile both inputs
    2. Skip the diagnosis when the report is empty
    3. Otherwise call the diagnosis engine
    """

    def __init__(
        self,
        config: ParserConfig = None,
        diagnosis_engine: "FunnelDiagnosisEngine" = None
    ):
        self.config = config or ParserConfig()
        self._diagnosis_engine = diagnosis_engine

    def _get_engine(self) -> "FunnelDiagnosisEngine":
        if self._diagnosis_engine is None:
            from ..layers.intelligence.diagnosis import FunnelDiagnosisEngine
            self._diagnosis_engine = FunnelDiagnosisEngine()
        return self._diagnosis_engine

    def run(
        self,
        raw_text: str,
        ledger_text: str,
        diagnose: bool = False,
        today: Optional[date] = None
    ) -> FunnelAnalysis:
        """Parse both inputs and optionally diagnose the result."""
        report = parse_report(raw_text, ledger_text, config=self.config, today=today)
        analysis = FunnelAnalysis(report=report)

        if not report.people:
            analysis.warnings.append("No salesperson found in the report or ledger")
            return analysis

        if diagnose:
            analysis.diagnosis = self._get_engine().diagnose(report)

        return analysis
