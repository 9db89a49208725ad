"""End-to-end tests for parse_report and the analysis use case."""

import math
import os
import subprocess
import sys
from pathlib import Path

from sales_funnel import parse_report
from sales_funnel.core.entities import Metrics
from sales_funnel.use_cases.report_parsing import FunnelAnalysisUseCase


class TestParseReportScenarios:

    def test_two_teams_with_revenue_only_name(
        self, two_team_report, two_team_ledger, parser_config, fixed_today
    ):
        report = parse_report(two_team_report, two_team_ledger, today=fixed_today)

        assert [t.name for t in report.teams] == ["A", "B", parser_config.unassigned_team]
        assert report.get_person("X").metrics.revenue == 10000.0
        assert report.totals.closings == 15

        z = report.get_person("Z")
        assert z.team == parser_config.unassigned_team
        assert z.metrics == Metrics(revenue=5000.0)
        unassigned = report.get_team(parser_config.unassigned_team)
        assert [p.name for p in unassigned.people] == ["Z"]

    def test_substring_identity_match(self):
        report = parse_report("*ERICA LIMA*\nFechamentos: 2", "LIMA: 1.000,00")

        assert [p.name for p in report.people] == ["ERICA LIMA"]
        assert report.get_person("ERICA LIMA").metrics.revenue == 1000.0
        assert report.get_person("LIMA") is None

    def test_two_metrics_in_one_line(self):
        report = parse_report("*ANA*\n10 Agendamentos 3 Visitas", "")
        ana = report.get_person("ANA")
        assert ana.metrics.appointments == 10
        assert ana.metrics.visits == 3

    def test_ambiguous_team_person_line_is_filtered(self):
        report = parse_report(
            "EQUIPE ALPHA\n*ALPHA*\nVisitas: 3\n*BRUNO*\nVisitas: 2",
            ""
        )
        assert [p.name for p in report.people] == ["BRUNO"]
        assert report.totals.visits == 2

    def test_full_chat_report(self, chat_report, chat_ledger):
        report = parse_report(chat_report, chat_ledger)

        assert report.report_date == "14/03/2024"
        assert [t.name for t in report.teams] == ["RK", "VENDAS PRO"]
        assert [p.name for p in report.people] == ["MATHEUS", "RICHARLYSSON", "ERICA LIMA"]
        assert report.get_person("RICHARLYSSON").metrics.revenue == 920000.0
        assert report.get_person("ERICA LIMA").metrics.revenue == 1450000.0
        assert report.totals.closings == 113
        assert report.totals.revenue == 3220000.0
        assert report.avg_revenue_per_closing == 3220000.0 / 113
        assert report.get_team("RK").efficiency.visit_to_closing == 1.0


class TestParseReportProperties:

    def test_idempotent(self, chat_report, chat_ledger, fixed_today):
        first = parse_report(chat_report, chat_ledger, today=fixed_today)
        second = parse_report(chat_report, chat_ledger, today=fixed_today)
        assert first == second

    def test_sum_invariant(self, chat_report, chat_ledger):
        report = parse_report(chat_report, chat_ledger)
        for team in report.teams:
            assert team.totals.revenue == sum(p.metrics.revenue for p in team.people)
        assert report.totals.revenue == sum(t.totals.revenue for t in report.teams)

    def test_zero_visits_and_closings(self):
        report = parse_report("*ANA*\nAnúncios: 4", "")
        eff = report.get_person("ANA").efficiency
        assert eff.visit_to_closing == 0.0
        assert not math.isnan(eff.visit_to_closing)

    def test_empty_inputs(self, fixed_today):
        report = parse_report("", "", today=fixed_today)

        assert report.report_date == "15/03/2024"
        assert report.people == ()
        assert report.teams == ()
        assert report.totals == Metrics()
        assert report.avg_revenue_per_closing == 0.0
        assert report.avg_revenue_per_person == 0.0

    def test_ledger_only(self):
        report = parse_report("", "Ana: 1.000\nBia: 2k")
        assert [p.name for p in report.people] == ["ANA", "BIA"]
        assert report.avg_revenue_per_person == 1500.0
        assert report.avg_revenue_per_closing == 3000.0

    def test_ledger_only_names_not_merged_by_containment(self):
        report = parse_report("", "ANA: 1.000\nMARIANA: 2.000")
        assert [p.name for p in report.people] == ["ANA", "MARIANA"]
        assert report.get_person("MARIANA").metrics.revenue == 2000.0

    def test_custom_unassigned_team(self, parser_config):
        config = parser_config.model_copy(update={"unassigned_team": "SEM EQUIPE"})
        report = parse_report("*ANA*\nVisitas: 1", "", config=config)
        assert report.people[0].team == "SEM EQUIPE"


class TestFunnelAnalysisUseCase:

    class _StubEngine:
        def __init__(self):
            self.calls = 0

        def diagnose(self, report):
            self.calls += 1
            return "Parágrafo 1\n\nParágrafo 2\n\nParágrafo 3"

    def test_parse_without_diagnosis(self, chat_report, chat_ledger):
        engine = self._StubEngine()
        analysis = FunnelAnalysisUseCase(diagnosis_engine=engine).run(chat_report, chat_ledger)

        assert analysis.diagnosis is None
        assert engine.calls == 0
        assert len(analysis.report.people) == 3

    def test_parse_with_diagnosis(self, chat_report, chat_ledger):
        engine = self._StubEngine()
        analysis = FunnelAnalysisUseCase(diagnosis_engine=engine).run(
            chat_report, chat_ledger, diagnose=True
        )
        assert analysis.diagnosis.startswith("Parágrafo 1")
        assert engine.calls == 1

    def test_empty_report_skips_diagnosis(self):
        engine = self._StubEngine()
        analysis = FunnelAnalysisUseCase(diagnosis_engine=engine).run("", "", diagnose=True)

        assert analysis.diagnosis is None
        assert engine.calls == 0
        assert analysis.warnings


class TestCoreImports:

    def test_parsing_does_not_load_langchain(self):
        root = Path(__file__).resolve().parents[1]
        code = (
            "import sys\n"
            "from sales_funnel import parse_report\n"
            "parse_report('*ANA*\\nVisitas: 1', 'ANA: 10')\n"
            "assert 'langchain_core' not in sys.modules\n"
        )
        env = {**os.environ, "PYTHONPATH": str(root)}
        result = subprocess.run(
            [sys.executable, "-c", code], cwd=root, env=env, capture_output=True, text=True
        )
        assert result.returncode == 0, result.stderr
