"""
Metric Extraction - counts from a single report line

Chat reports mix two phrasings freely:
- number before label: "10 Agendamentos", "10 - Agend"
- label before number: "Agendamentos: 10", "Agend 10", "Visitas=3"

Both are tried for each metric, number-first, so that a line such as
"10 Agend 5 Visitas" assigns 10 to appointments and 5 to visits.
"""

import re
from functools import lru_cache
from typing import Iterable, Optional

from ...config.settings import MetricKind, ParserConfig
from ...core.entities import Metrics

# "1.057" is read as 1057 (pt-BR thousands grouping)
_COUNT = r"(\d{1,3}(?:\.\d{3})+(?!\d)|\d+)"

# A number right after "Label:", "Label -", "Label." or "Label =" belongs to
# that label when the label is a metric synonym. Whitespace alone does not
# bind, so "10 Agend 5 Visitas" keeps 5 for visits.
_OWNER_SEPARATORS = r"\s*[:\-=.>][:\s\-=.>]*$"


def _alternation(words) -> str:
    ordered = sorted({w.strip() for w in words if w.strip()}, key=len, reverse=True)
    return "|".join(re.escape(w) for w in ordered)


@lru_cache(maxsize=128)
def _build_patterns(keywords: tuple) -> Optional[tuple]:
    """Compile the number-first and label-first patterns for a synonym set."""
    alternation = _alternation(keywords)
    if not alternation:
        return None

    number_first = re.compile(
        rf"(?<!\d){_COUNT}[:\s\-]*\b(?:{alternation})",
        re.IGNORECASE
    )
    label_first = re.compile(
        rf"\b(?:{alternation})[:\s\-=.>]*{_COUNT}",
        re.IGNORECASE
    )
    return number_first, label_first


@lru_cache(maxsize=128)
def _owner_pattern(labels: tuple) -> Optional[re.Pattern]:
    alternation = _alternation(labels)
    if not alternation:
        return None
    return re.compile(rf"\b(?:{alternation}){_OWNER_SEPARATORS}", re.IGNORECASE)


@lru_cache(maxsize=1)
def _default_labels() -> tuple:
    config = ParserConfig()
    return tuple(word for metric in MetricKind for word in config.synonyms_for(metric))


def _to_int(token: str) -> int:
    return int(token.replace(".", ""))


def extract_metric_value(
    line: str,
    keywords: Iterable[str],
    labels: Optional[Iterable[str]] = None
) -> int:
    """
    Return the count given for one metric on *line*, or 0.

    Args:
        line: Raw report line
        keywords: Synonyms of the metric (any case)
        labels: Synonyms of every metric; a number written right after one
            of them ("Anúncios: 10") is not read number-first. Defaults to
            the ParserConfig vocabulary.

    Returns:
        A non-negative integer; 0 when the metric is not mentioned.

    Examples:
        extract_metric_value("10 Agendamentos 3 Visitas", ["AGENDAMENTOS", "AGEND"]) -> 10
        extract_metric_value("Agend: 7", ["AGENDAMENTOS", "AGEND"]) -> 7
        extract_metric_value("Hoje: 10 agendamentos", ["AGENDAMENTOS"]) -> 10
    """
    if not line:
        return 0

    keywords = tuple(keywords)
    patterns = _build_patterns(keywords)
    if patterns is None:
        return 0
    number_first, label_first = patterns

    if labels is None:
        labels = _default_labels()
    owner = _owner_pattern(tuple(labels) + keywords)

    for match in number_first.finditer(line):
        if owner and owner.search(line[:match.start(1)]):
            continue
        return _to_int(match.group(1))

    match = label_first.search(line)
    if match:
        return _to_int(match.group(1))

    return 0


def extract_metrics(line: str, config: ParserConfig) -> Metrics:
    """Scan *line* for every funnel metric; revenue is never read here."""
    labels = tuple(word for metric in MetricKind for word in config.synonyms_for(metric))
    counts = {
        metric.value: extract_metric_value(line, config.synonyms_for(metric), labels)
        for metric in MetricKind
    }
    return Metrics(**counts)
