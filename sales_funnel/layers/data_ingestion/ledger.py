"""
Revenue Ledger Parser

Turns a freeform "name: amount" list into a name -> revenue mapping.

Accepted line shapes:
- "MATHEUS: 850.000,00"
- "Erica Lima - R$ 1.450.000,00"
- "Richarlysson 920k"
- "Ana 1,2m"

Amounts use the pt-BR convention: "." groups thousands and "," marks
decimals. With a k/m suffix a lone separator is read as the decimal mark
("1.5k" and "1,5k" are both 1500).
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Optional

from ...config.settings import ParserConfig
from .identity_resolution import normalize_name

logger = logging.getLogger(__name__)

_MULTIPLIERS = {"k": Decimal(1000), "m": Decimal(1000000)}


@lru_cache(maxsize=16)
def _line_pattern(currency_prefix: str) -> re.Pattern:
    prefix = f"(?:{re.escape(currency_prefix)})?" if currency_prefix else ""
    return re.compile(
        rf"^(.+?)[\s:\-]+({prefix}\s*[\d.,]+[kKmM]?)$",
        re.IGNORECASE
    )


def parse_amount(token: str, currency_prefix: str = "R$") -> Optional[float]:
    """
    Parse a monetary token into a float.

    Returns None when the token is not a number.

    Examples:
        '10.000,00' -> 10000.0
        'R$ 1.234,56k' -> 1234560.0
        '1,5m' -> 1500000.0
    """
    s = str(token or "").strip().lower()
    if currency_prefix:
        s = s.replace(currency_prefix.lower(), "")
    s = s.strip()

    multiplier = Decimal(1)
    if s[-1:] in _MULTIPLIERS:
        multiplier = _MULTIPLIERS[s[-1]]
        s = s[:-1].strip()
        if "." in s and "," in s:
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", ".")
    else:
        s = s.replace(".", "").replace(",", ".")

    try:
        value = Decimal(s) * multiplier
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return float(value)


def is_ledger_header(line: str, config: ParserConfig) -> bool:
    """True for header, total or section lines ("TOTAL EQUIPE", "META: 1M")."""
    upper = line.upper()
    return any(word in upper for word in config.ledger_denylist)


def parse_ledger(text: str, config: ParserConfig = None) -> dict[str, float]:
    """
    Parse the revenue ledger.

    Args:
        text: Multi-line ledger text
        config: Parser vocabulary (defaults to ParserConfig())

    Returns:
        Normalized name -> summed amount, in order of first appearance.
        Lines that do not parse are skipped.
    """
    config = config or ParserConfig()
    pattern = _line_pattern(config.currency_prefix)
    revenue: dict[str, float] = {}

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if is_ledger_header(line, config):
            logger.debug("Skipping ledger header %r", line)
            continue

        match = pattern.match(line)
        if not match:
            logger.debug("Ledger line without name and amount: %r", line)
            continue

        name = normalize_name(match.group(1))
        amount = parse_amount(match.group(2), config.currency_prefix)
        if not name or amount is None:
            logger.debug("Unparseable ledger line: %r", line)
            continue

        revenue[name] = revenue.get(name, 0.0) + amount

    return revenue
