"""Shared fixtures for the funnel reconciler test suite."""

from datetime import date

import pytest

from sales_funnel.config.settings import ParserConfig


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def parser_config() -> ParserConfig:
    """Default Portuguese vocabulary."""
    return ParserConfig()


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 3, 15)


# ---------------------------------------------------------------------------
# Sample inputs
# ---------------------------------------------------------------------------


@pytest.fixture
def two_team_report() -> str:
    """Two teams, one person each, full metric lines."""
    return (
        "EQUIPE A\n"
        "*X*\n"
        "Anúncios: 100\n"
        "Ligações: 50\n"
        "Fechamentos: 5\n"
        "EQUIPE B\n"
        "*Y*\n"
        "Anúncios: 200\n"
        "Fechamentos: 10"
    )


@pytest.fixture
def two_team_ledger() -> str:
    """X is in the report; Z only appears in the ledger."""
    return "X: 10.000,00\nZ: 5.000,00"


@pytest.fixture
def chat_report() -> str:
    """A WhatsApp-style daily report with three salespeople."""
    return """RELATÓRIO DIÁRIO 14/03/2024
EQUIPE RK
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


@pytest.fixture
def chat_ledger() -> str:
    return """VGV DO MÊS
MATHEUS: 850.000,00
RICHARLYSSON: R$ 920k
LIMA: 1.450.000,00
TOTAL: 3.220.000,00"""
