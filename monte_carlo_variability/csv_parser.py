"""
Permissive extraction of numeric observations from CSV-like text.

Accepts comma separated values, one value per line, or a mix of both.
Each token contributes its leading decimal literal, so "12kg" reads as 12
and "1_000" as 1. Tokens with no leading number, or whose number is not
finite, are skipped without error.
"""
import logging
import math
import re
from typing import List, Optional

from monte_carlo_variability.config import MAX_OBSERVATIONS

logger = logging.getLogger(__name__)

__all__ = ["parse_csv"]

# Sign, digits with optional fraction (or a bare fraction), optional exponent
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_token(token: str) -> Optional[float]:
    match = _LEADING_NUMBER.match(token)
    if match is None:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value


def parse_csv(text: Optional[str], limit: int = MAX_OBSERVATIONS) -> List[float]:
    """
    Parse up to `limit` finite numbers from free-form text.

    Lines are split on newlines, then on commas; each token is trimmed and
    its leading decimal literal parsed as a float. Values are returned in encounter order. Empty or
    fully non-numeric input gives an empty list.
    """
    if not text:
        logger.debug("parse_csv: empty input")
        return []

    values: List[float] = []
    skipped = 0
    for line in text.strip().split("\n"):
        for token in line.split(","):
            token = token.strip()
            if not token:
                continue
            value = _parse_token(token)
            if value is None:
                skipped += 1
                continue
            values.append(value)
            if len(values) >= limit:
                logger.debug("parse_csv: reached limit of %s values, ignoring the rest", limit)
                return values

    logger.debug("parse_csv: parsed %s values, skipped %s tokens", len(values), skipped)
    return values
