"""
Line Classification for operational reports

Each line of a chat report is one of:
- TeamMarker: "EQUIPE RK", "*TIME: ALPHA*", "Unidade - Centro"
- PersonMarker: "*MATHEUS*", "* Erica Lima:", "Vendedor: João"
- Noise: anything else (metric lines included; the scanner reads
  metrics from non-marker lines on its own)

The keyword lists live in ParserConfig, so a new locale or team naming
convention only needs configuration.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

from ...config.settings import ParserConfig
from .identity_resolution import normalize_name

_DIGIT_RE = re.compile(r"\d")
_SEPARATORS_RE = re.compile(r"[:\-*]")
_TRAILING_DATE_RE = re.compile(r"\d{1,2}/\d{1,2}.*$")
_DATE_RE = re.compile(r"(?<!\d)(\d{1,2}/\d{1,2}(?:/\d{2,4})?)(?!\d)")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class TeamMarker:
    name: str


@dataclass(frozen=True)
class PersonMarker:
    name: str


@dataclass(frozen=True)
class Noise:
    pass


LineClass = Union[TeamMarker, PersonMarker, Noise]

NOISE = Noise()


def _alternation(words) -> str:
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


@lru_cache(maxsize=16)
def _team_prefix_re(keywords: tuple) -> Optional[re.Pattern]:
    if not keywords:
        return None
    return re.compile(rf"^(?:{_alternation(keywords)})[\s:\-]+")


@lru_cache(maxsize=16)
def _team_strip_re(words: tuple) -> Optional[re.Pattern]:
    if not words:
        return None
    return re.compile(rf"\b(?:{_alternation(words)})\b")


@lru_cache(maxsize=16)
def _person_prefix_re(keywords: tuple) -> Optional[re.Pattern]:
    if not keywords:
        return None
    return re.compile(rf"^(?:{_alternation(keywords)})[\s:\-]+(.+)")


def _clean(line: str) -> str:
    return line.strip().upper().replace("*", "").strip()


def team_name_from(line: str, config: ParserConfig) -> Optional[str]:
    """
    Return the team introduced by *line*, or None.

    Examples:
        'EQUIPE: RK' -> 'RK'
        'RELATÓRIO DE EQUIPE VENDAS PRO 15/03' -> 'VENDAS PRO'
    """
    clean = _clean(line)
    prefix = _team_prefix_re(tuple(config.team_keywords))
    is_team_line = bool(prefix and prefix.match(clean)) or any(
        phrase in clean for phrase in config.team_phrases
    )
    if not is_team_line:
        return None

    name = _TRAILING_DATE_RE.sub("", clean)
    strip = _team_strip_re(tuple(config.team_keywords + config.team_noise_words))
    if strip:
        name = strip.sub(" ", name)
    name = _SEPARATORS_RE.sub(" ", name)
    name = _WHITESPACE_RE.sub(" ", name).strip()
    return name or None


def person_candidate_from(line: str, config: ParserConfig) -> Optional[str]:
    """Extract the raw person candidate of an emphasis or "Vendedor:" line."""
    trimmed = line.strip()
    if any(trimmed.startswith(marker) for marker in config.emphasis_markers):
        return normalize_name(trimmed)

    prefix = _person_prefix_re(tuple(config.person_keywords))
    if prefix:
        match = prefix.match(_clean(trimmed))
        if match:
            return normalize_name(match.group(1))
    return None


def is_valid_person_name(name: str, config: ParserConfig) -> bool:
    """Reject short names, names with digits and metric/team labels ("AGENDAMENTOS")."""
    if len(name) < config.min_name_length:
        return False
    if _DIGIT_RE.search(name):
        return False
    return not any(word in name for word in config.reserved_words)


def classify_line(line: str, config: ParserConfig = None) -> LineClass:
    """
    Classify one report line.

    Team markers take precedence over person markers, so "*EQUIPE RK*"
    is a team and never a salesperson.
    """
    config = config or ParserConfig()
    if not line or not line.strip():
        return NOISE

    team = team_name_from(line, config)
    if team:
        return TeamMarker(team)

    candidate = person_candidate_from(line, config)
    if candidate and is_valid_person_name(candidate, config):
        return PersonMarker(candidate)

    return NOISE


def detect_report_date(line: str, config: ParserConfig = None) -> Optional[str]:
    """Return the date of a "RELATÓRIO ... 15/03" style line, or None."""
    config = config or ParserConfig()
    match = _DATE_RE.search(line or "")
    if not match:
        return None
    upper = line.upper()
    if any(keyword in upper for keyword in config.report_keywords):
        return match.group(1)
    return None
