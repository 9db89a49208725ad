"""Tests for the operational report scan (fold over lines)."""

from sales_funnel.core.entities import Metrics
from sales_funnel.layers.data_ingestion.report_scanner import (
    ScanState,
    scan_line,
    scan_report,
)


class TestScanLine:
    """Single steps of the fold."""

    def test_steps_do_not_mutate_previous_state(self, parser_config):
        s0 = ScanState.initial(parser_config)
        s1 = scan_line(s0, "*ANA*", parser_config)
        s2 = scan_line(s1, "Visitas: 2", parser_config)

        assert s0.people == {}
        assert s0.current_person is None
        assert s1.people["ANA"].metrics == Metrics()
        assert s2.people["ANA"].metrics.visits == 2

    def test_team_marker_resets_current_person(self, parser_config):
        state = scan_line(ScanState.initial(parser_config), "*ANA*", parser_config)
        state = scan_line(state, "EQUIPE NORTE", parser_config)

        assert state.active_team == "NORTE"
        assert state.current_person is None
        assert state.team_labels == ("NORTE",)

    def test_blank_line_is_a_no_op(self, parser_config):
        state = ScanState.initial(parser_config)
        assert scan_line(state, "   ", parser_config) is state


class TestScanReport:

    def test_persons_attached_to_active_team(self, parser_config, two_team_report):
        state = scan_report(two_team_report, parser_config)

        assert list(state.people) == ["X", "Y"]
        assert state.people["X"].team == "A"
        assert state.people["Y"].team == "B"
        assert state.people["X"].metrics == Metrics(ads=100, calls=50, closings=5)
        assert state.people["Y"].metrics == Metrics(ads=200, closings=10)

    def test_person_without_team_goes_to_unassigned(self, parser_config):
        state = scan_report("*ANA*\nVisitas: 1", parser_config)
        assert state.people["ANA"].team == parser_config.unassigned_team

    def test_metrics_accumulate(self, parser_config):
        state = scan_report("*ANA*\nAnúncios: 5\nAnúncios: 7", parser_config)
        assert state.people["ANA"].metrics.ads == 12

    def test_multiple_metrics_on_one_line(self, parser_config):
        state = scan_report("*ANA*\n10 Agendamentos 3 Visitas", parser_config)
        metrics = state.people["ANA"].metrics
        assert metrics.appointments == 10
        assert metrics.visits == 3

    def test_repeated_person_accumulates_into_same_entity(self, parser_config):
        state = scan_report(
            "*ANA*\nVisitas: 1\n*BIA*\nVisitas: 2\n*ana*\nVisitas: 3",
            parser_config
        )
        assert list(state.people) == ["ANA", "BIA"]
        assert state.people["ANA"].metrics.visits == 4
        assert state.people["BIA"].metrics.visits == 2

    def test_metrics_before_any_person_are_ignored(self, parser_config):
        state = scan_report("Anúncios: 100\n*ANA*\nAnúncios: 1", parser_config)
        assert state.people["ANA"].metrics.ads == 1

    def test_metrics_after_team_marker_are_ignored(self, parser_config):
        state = scan_report("*ANA*\nAnúncios: 5\nEQUIPE B\nAnúncios: 7", parser_config)
        assert state.people["ANA"].metrics.ads == 5

    def test_bold_metric_label_is_read_as_metric(self, parser_config):
        state = scan_report("*ANA*\n*Agendamentos:* 10", parser_config)
        assert list(state.people) == ["ANA"]
        assert state.people["ANA"].metrics.appointments == 10

    def test_report_date_detected(self, parser_config, chat_report):
        state = scan_report(chat_report, parser_config)
        assert state.report_date == "14/03/2024"

    def test_team_line_with_date_sets_both(self, parser_config):
        state = scan_report("RELATÓRIO DE EQUIPE RK 15/03\n*ANA*\nVisitas: 1", parser_config)
        assert state.report_date == "15/03"
        assert state.people["ANA"].team == "RK"

    def test_malformed_lines_do_not_abort(self, parser_config):
        state = scan_report(
            "*ANA*\nVisitas: ???\n@@@ %%% ###\nFechamentos: 2",
            parser_config
        )
        assert state.people["ANA"].metrics.closings == 2

    def test_empty_report(self, parser_config):
        state = scan_report("", parser_config)
        assert state.people == {}
        assert state.report_date is None
