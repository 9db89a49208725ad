#!/usr/bin/env python3
"""
Sales Funnel Reconciler - Demo

Parses a sample chat funnel report and revenue ledger and prints:
1. Report date and global funnel totals
2. Per-team rollups with efficiency ratios
3. Revenue leaderboard
4. LLM diagnosis (with --diagnose, requires a configured provider)

Custom inputs can be given as files: python main.py report.txt ledger.txt
"""

import argparse
import logging
from pathlib import Path

from sales_funnel.config.settings import get_settings
from sales_funnel.layers.intelligence.diagnosis import format_currency, split_paragraphs
from sales_funnel.metrics.calculator import rank_people
from sales_funnel.use_cases.report_parsing import FunnelAnalysisUseCase


EXAMPLE_REPORT = """EQUIPE RK
*MATHEUS*
Anúncios: 2626
Ligações: 1057
Agendamentos: 89
Visitas: 30
Fechamentos: 29

*RICHARLYSSON*
Anúncios: 1730
Ligações: 816
Agendamentos: 113
Visitas: 28
Fechamentos: 28

EQUIPE VENDAS PRO
*ERICA LIMA*
Anúncios: 2240
Ligações: 1120
Agendamentos: 140
Visitas: 84
Fechamentos: 56"""

EXAMPLE_LEDGER = """MATHEUS: 850.000,00
RICHARLYSSON: 920.000,00
ERICA LIMA: 1.450.000,00"""


def print_report(report):
    """Print the funnel summary of a ReportResult."""
    totals = report.totals
    print("=" * 60)
    print(f"FUNNEL REPORT - {report.report_date}")
    print("=" * 60)
    print()
    print(f"{'Ads':<14} {totals.ads:>10}")
    print(f"{'Calls':<14} {totals.calls:>10}")
    print(f"{'Appointments':<14} {totals.appointments:>10}")
    print(f"{'Visits':<14} {totals.visits:>10}")
    print(f"{'Closings':<14} {totals.closings:>10}")
    print(f"{'Revenue':<14} R$ {format_currency(totals.revenue)}")
    print(f"{'Avg ticket':<14} R$ {format_currency(report.avg_revenue_per_closing)}")
    print(f"{'Avg/person':<14} R$ {format_currency(report.avg_revenue_per_person)}")
    print()

    print(f"{'Team':<20} {'People':>6} {'Closings':>9} {'Ads/Call':>9} {'Visit/Close':>12}")
    print("-" * 60)
    for team in report.teams:
        print(
            f"{team.name:<20} {len(team.people):>6} {team.totals.closings:>9} "
            f"{team.efficiency.ads_to_call:>9.1f} {team.efficiency.visit_to_closing:>12.1f}"
        )
    print()

    print("Revenue ranking:")
    for i, person in enumerate(rank_people(report.people), 1):
        print(f"  {i}. {person.name:<20} {person.team:<15} R$ {format_currency(person.metrics.revenue)}")
    print()


def parse_args(argv=None):
    """Parse the command line."""
    parser = argparse.ArgumentParser(description="Reconcile a chat funnel report with a revenue ledger")
    parser.add_argument("report", nargs="?", type=Path, help="Path to the chat report text")
    parser.add_argument("ledger", nargs="?", type=Path, help="Path to the revenue ledger text")
    parser.add_argument("--diagnose", action="store_true", help="Ask the configured LLM for a diagnosis")
    args = parser.parse_args(argv)
    if (args.report is None) != (args.ledger is None):
        parser.error("report and ledger must be given together")
    return args


def main(argv=None):
    """Main entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    args = parse_args(argv)
    if args.report is not None:
        raw_text = args.report.read_text(encoding="utf-8")
        ledger_text = args.ledger.read_text(encoding="utf-8")
    else:
        raw_text, ledger_text = EXAMPLE_REPORT, EXAMPLE_LEDGER

    use_case = FunnelAnalysisUseCase(config=settings.parser)
    analysis = use_case.run(raw_text, ledger_text, diagnose=args.diagnose)

    for warning in analysis.warnings:
        print(f"Warning: {warning}")
    print_report(analysis.report)

    if analysis.diagnosis:
        print("=" * 60)
        print("DIAGNOSIS")
        print("=" * 60)
        for paragraph in split_paragraphs(analysis.diagnosis):
            print(paragraph)
            print()


if __name__ == "__main__":
    main()
