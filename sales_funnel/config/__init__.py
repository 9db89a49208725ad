"""
Configuration Management

Centralized configuration for:
- Parser vocabulary (metric synonyms, team/person markers, denylists)
- LLM providers (OpenAI, Anthropic, Ollama, Azure OpenAI)
"""

from .settings import (
    Settings,
    LLMConfig,
    LLMProviderType,
    MetricKind,
    ParserConfig,
    get_settings
)
from .providers import (
    LLMProvider,
    get_chat_model
)

__all__ = [
    "Settings",
    "LLMConfig",
    "LLMProviderType",
    "MetricKind",
    "ParserConfig",
    "get_settings",
    "LLMProvider",
    "get_chat_model"
]
