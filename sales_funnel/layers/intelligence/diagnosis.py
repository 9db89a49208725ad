"""
LangChain-based Funnel Diagnosis

Turns a parsed ReportResult into a three-paragraph Sales Ops diagnosis
using the configured chat model:
- LangChain prompt templates
- LCEL chain (prompt | chat model | string parser)

The diagnosis is advisory text. Any LLM failure is reported as a fixed
message instead of an exception, so a report can always be shown.
"""

import logging
from datetime import datetime

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from ...core.entities import ReportResult

logger = logging.getLogger(__name__)


# =============================================================================
# Prompts
# =============================================================================

DIAGNOSIS_SYSTEM_PROMPT = """Aja como um Estrategista Sênior de Sales Ops especializado em consórcio.
Analise os dados de performance da equipe e gere um diagnóstico crítico de exatamente 3 parágrafos,
separados por uma linha em branco.
Foque em identificar onde o funil está vazando e quais ações práticas o gestor deve tomar."""


DIAGNOSIS_USER_TEMPLATE = """DADOS CONSOLIDADOS ({report_date}):
- Anúncios: {ads}
- Ligações: {calls}
- Agendamentos: {appointments}
- Visitas: {visits}
- Fechamentos: {closings}
- VGV Total: R$ {revenue}
- Ticket Médio: R$ {avg_ticket}

EFICIÊNCIA:
- Anúncio/Ligação: {ads_to_call}
- Ligação/Agendamento: {call_to_appointment}
- Agendamento/Visita: {appointment_to_visit}
- Visita/Fechamento: {visit_to_closing}

Instruções:
1. Seja direto e executivo.
2. Identifique a maior "dor" (ex: baixo volume de ligações vs anúncios, ou baixa conversão de visita).
3. Use um tom profissional e motivador."""


UNAVAILABLE_MESSAGE = "Não foi possível gerar o diagnóstico no momento."
ERROR_MESSAGE = "Erro ao processar diagnóstico de IA. Verifique sua conexão ou chave de API."


def format_currency(value: float) -> str:
    """Format an amount the pt-BR way: 1234567.8 -> '1.234.567,80'."""
    return f"{value:,.2f}".translate(str.maketrans(",.", ".,"))


def build_prompt_variables(report: ReportResult) -> dict:
    """Flatten the report into the template variables."""
    totals = report.totals
    efficiency = report.efficiency
    return {
        "report_date": report.report_date,
        "ads": totals.ads,
        "calls": totals.calls,
        "appointments": totals.appointments,
        "visits": totals.visits,
        "closings": totals.closings,
        "revenue": format_currency(totals.revenue),
        "avg_ticket": format_currency(report.avg_revenue_per_closing),
        "ads_to_call": f"{efficiency.ads_to_call:.1f}",
        "call_to_appointment": f"{efficiency.call_to_appointment:.1f}",
        "appointment_to_visit": f"{efficiency.appointment_to_visit:.1f}",
        "visit_to_closing": f"{efficiency.visit_to_closing:.1f}"
    }


def split_paragraphs(text: str) -> list[str]:
    """Split diagnosis prose on blank lines."""
    blocks = []
    current = []
    for line in (text or "").splitlines():
        if line.strip():
            current.append(line.strip())
        elif current:
            blocks.append(" ".join(current))
            current = []
    if current:
        blocks.append(" ".join(current))
    return blocks


# =============================================================================
# Diagnosis Engine
# =============================================================================

class FunnelDiagnosisEngine:
    """
    Generates the narrative diagnosis of a report.

    The chat model comes from LLMProvider unless one is injected, which
    is how tests pass a fake model.
    """

    def __init__(self, llm_provider=None, chat_model=None):
        self._provider = llm_provider
        self._chat_model = chat_model
        self._chain = None
        self.last_latency_ms: float = 0.0

    def _get_chat_model(self):
        """Lazy load the chat model."""
        if self._chat_model is None:
            if self._provider is None:
                from ...config.providers import LLMProvider
                self._provider = LLMProvider()
            self._chat_model = self._provider.get_chat_model()
        return self._chat_model

    def _get_chain(self):
        if self._chain is None:
            prompt = ChatPromptTemplate.from_messages([
                ("system", DIAGNOSIS_SYSTEM_PROMPT),
                ("human", DIAGNOSIS_USER_TEMPLATE)
            ])
            self._chain = prompt | self._get_chat_model() | StrOutputParser()
        return self._chain

    def diagnose(self, report: ReportResult) -> str:
        """
        Produce the diagnosis for *report*.

        Returns:
            Prose paragraphs separated by blank lines, or a fixed
            message when the model is unavailable.
        """
        start_time = datetime.now()
        try:
            text = self._get_chain().invoke(build_prompt_variables(report))
        except Exception as e:
            logger.error("Funnel diagnosis failed: %s", e)
            return ERROR_MESSAGE
        finally:
            self.last_latency_ms = (datetime.now() - start_time).total_seconds() * 1000

        text = (text or "").strip()
        return text or UNAVAILABLE_MESSAGE
