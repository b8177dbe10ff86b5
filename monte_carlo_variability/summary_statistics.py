"""
PURPOSE: Descriptive statistics for observation sets and simulated samples.

RESPONSIBILITIES:
- Compute count, mean, population variance, std dev, min, max, median
- Return None for empty input instead of raising
- Single responsibility: no sampling, no formatting beyond to_dict
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np

from monte_carlo_variability.config import ROUND_STATISTIC


@dataclass(frozen=True)
class StatisticsRecord:
    """Summary of a non-empty numeric sequence.

    Attributes:
        count (int): Number of values (always >= 1).
        mean (float): Arithmetic mean.
        variance (float): Population variance (divides by N, not N - 1).
        std_dev (float): Square root of the population variance.
        min (float): Smallest value.
        max (float): Largest value.
        median (float): Middle value of the sorted data, averaging the two
            central values for even counts.
    """
    count: int
    mean: float
    variance: float
    std_dev: float
    min: float
    max: float
    median: float

    @property
    def range(self) -> float:
        return self.max - self.min

    def to_dict(self, decimals: Optional[int] = ROUND_STATISTIC) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        def _round(value: float) -> float:
            return value if decimals is None else round(value, decimals)

        return {
            "count": self.count,
            "mean": _round(self.mean),
            "variance": _round(self.variance),
            "std_dev": _round(self.std_dev),
            "min": _round(self.min),
            "max": _round(self.max),
            "median": _round(self.median),
        }


def summarize(data: Union[Sequence[float], np.ndarray]) -> Optional[StatisticsRecord]:
    """
    Compute the StatisticsRecord of `data`.

    Args:
        data: Sequence of finite numbers. Not modified; the median and
            extremes come from a sorted copy.

    Returns:
        StatisticsRecord, or None when `data` is empty.
    """
    values = np.asarray(data, dtype=float)
    n = values.size
    if n == 0:
        return None

    ordered = np.sort(values)
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(np.mean(values))
        if not math.isfinite(mean):
            # Sum left the float range: average in units of the largest magnitude
            scale = float(np.max(np.abs(values)))
            mean = scale * float(np.mean(values / scale))
        # Summation rounding can push the mean a few ulps past the extremes
        mean = min(max(mean, float(ordered[0])), float(ordered[-1]))

        variance = float(np.mean((values - mean) ** 2))
        std_dev = math.sqrt(variance)
        if not math.isfinite(variance):
            half_deviations = values / 2 - mean / 2
            scale = float(np.max(np.abs(half_deviations)))
            std_dev = 2 * scale * math.sqrt(float(np.mean((half_deviations / scale) ** 2)))
            # Only the variance itself can exceed the float range here
            variance = std_dev * std_dev

    if n % 2 == 0:
        median = float(ordered[n // 2 - 1] / 2 + ordered[n // 2] / 2)
    else:
        median = float(ordered[n // 2])

    return StatisticsRecord(
        count=int(n),
        mean=mean,
        variance=variance,
        std_dev=std_dev,
        min=float(ordered[0]),
        max=float(ordered[-1]),
        median=median,
    )
