"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support
- Validation
- Parser vocabulary (metric synonyms, denylists, markers) as data
- LLM provider configuration for the funnel diagnosis
"""

from enum import Enum
from typing import Optional, Dict, List
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProviderType(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"
    AZURE_OPENAI = "azure_openai"


class MetricKind(str, Enum):
    """Funnel stages counted per salesperson, in funnel order."""
    ADS = "ads"
    CALLS = "calls"
    APPOINTMENTS = "appointments"
    VISITS = "visits"
    CLOSINGS = "closings"


class LLMConfig(BaseSettings):
    """LLM provider configuration."""
    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        extra="ignore"
    )

    provider: LLMProviderType = LLMProviderType.OPENAI
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 1024
    timeout: int = 60

    # API Keys (loaded from environment)
    openai_api_key: Optional[SecretStr] = Field(default=None, alias="OPENAI_API_KEY")
    anthropic_api_key: Optional[SecretStr] = Field(default=None, alias="ANTHROPIC_API_KEY")

    # Ollama settings
    ollama_base_url: str = "http://localhost:11434"

    # Azure OpenAI settings
    azure_endpoint: Optional[str] = None
    azure_api_version: str = "2024-02-15-preview"
    azure_deployment_name: Optional[str] = None


class ParserConfig(BaseSettings):
    """
    Vocabulary used by the report and ledger parsers.

    The defaults match Portuguese chat reports (WhatsApp style). Every list
    can be overridden with a JSON value in a PARSER_* environment variable,
    e.g. PARSER_TEAM_KEYWORDS='["EQUIPE", "SQUAD"]'.
    """
    model_config = SettingsConfigDict(
        env_prefix="PARSER_",
        extra="ignore"
    )

    # Team used when no team marker precedes a person
    unassigned_team: str = "GERAL"

    metric_synonyms: Dict[MetricKind, List[str]] = Field(default_factory=lambda: {
        MetricKind.ADS: ["ANÚNCIOS", "ANUNCIOS", "ANÚN", "ANUN", "ADS", "LEADS", "LEAD"],
        MetricKind.CALLS: ["LIGAÇÕES", "LIGACOES", "LIGAÇOES", "LIG", "CONTATOS"],
        MetricKind.APPOINTMENTS: [
            "AGENDAMENTOS", "AGENDAMENTO", "AGEND", "AGD", "REUNIÕES", "REUNIOES"
        ],
        MetricKind.VISITS: [
            "VISITAS", "VISITA", "VIS", "COMPARECIMENTOS", "PRESENÇA", "PRESENCA"
        ],
        MetricKind.CLOSINGS: ["FECHAMENTOS", "FECHAMENTO", "FECH", "VENDAS", "VENDA", "FCH"],
    })

    # Team markers: "EQUIPE: RK", "TIME ALPHA", "UNIDADE - CENTRO"
    team_keywords: List[str] = Field(
        default_factory=lambda: ["EQUIPE", "UNIDADE", "TIME", "FILIAL"]
    )
    team_phrases: List[str] = Field(
        default_factory=lambda: ["RELATÓRIO DE EQUIPE", "RELATORIO DE EQUIPE"]
    )
    # Words stripped from a team line to leave the team name
    team_noise_words: List[str] = Field(
        default_factory=lambda: ["RELATÓRIO", "RELATORIO", "DE", "DA", "DO", "DATA"]
    )

    # Person markers: "*JEFERSON*", "Vendedor: Jeferson"
    emphasis_markers: List[str] = Field(default_factory=lambda: ["*"])
    person_keywords: List[str] = Field(
        default_factory=lambda: ["VENDEDOR", "CONSULTOR", "NOME"]
    )
    reserved_words: List[str] = Field(default_factory=lambda: [
        "AGEND", "LIG", "VIS", "FECH", "ANÚN", "ANUN", "ADS", "RESUMO", "TOTAL",
        "DIÁRIO", "SEMANAL", "MENSAL", "META", "LEADS", "LEAD",
        "EQUIPE", "UNIDADE", "TIME", "FILIAL", "RELATÓRIO", "RELATORIO", "VENDEDOR",
    ])
    min_name_length: int = 1

    # Report date: "RELATÓRIO DIÁRIO 15/03"
    report_keywords: List[str] = Field(
        default_factory=lambda: ["RELATÓRIO", "RELATORIO", "RESUMO"]
    )
    date_format: str = "%d/%m/%Y"

    # Ledger lines containing these words are headers or totals
    ledger_denylist: List[str] = Field(default_factory=lambda: [
        "TOTAL", "EQUIPE", "RESUMO", "META", "RELATÓRIO", "RELATORIO", "DATA"
    ])
    currency_prefix: str = "R$"

    @field_validator(
        "team_keywords", "team_phrases", "team_noise_words", "person_keywords",
        "reserved_words", "report_keywords", "ledger_denylist"
    )
    @classmethod
    def _upper_words(cls, value: List[str]) -> List[str]:
        return [word.strip().upper() for word in value if word.strip()]

    @field_validator("unassigned_team")
    @classmethod
    def _upper_team(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("unassigned_team must not be empty")
        return value

    def synonyms_for(self, metric: MetricKind) -> List[str]:
        """Synonyms configured for a funnel metric (empty when unset)."""
        return self.metric_synonyms.get(metric, [])


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "Sales Funnel Reconciler"
    debug: bool = False
    log_level: str = "INFO"

    # Sub-configurations
    llm: LLMConfig = Field(default_factory=LLMConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            llm=LLMConfig(),
            parser=ParserConfig()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
