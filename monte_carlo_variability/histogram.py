"""
Fixed-width histogram of simulated values.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

import numpy as np

from monte_carlo_variability.config import HISTOGRAM_BINS, ROUND_FREQUENCY
from monte_carlo_variability.errors import InvalidConfigError

logger = logging.getLogger(__name__)

__all__ = ["HistogramBin", "build_histogram"]


@dataclass(frozen=True)
class HistogramBin:
    bin_center: float
    count: int
    frequency_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bin_center": self.bin_center,
            "count": self.count,
            "frequency_percent": self.frequency_percent,
        }


def build_histogram(
    data: Union[Sequence[float], np.ndarray],
    bin_count: int = HISTOGRAM_BINS,
) -> List[HistogramBin]:
    """
    Bin `data` into `bin_count` equal-width buckets spanning [min, max].

    The maximum value falls in the last bucket. When every value is equal
    the width is zero and a single bucket centered on that value holds
    everything. Frequencies are percentages of len(data), rounded to
    ROUND_FREQUENCY decimal places.
    """
    if bin_count < 1:
        raise InvalidConfigError(f"bin_count must be >= 1, got {bin_count}")

    values = np.asarray(data, dtype=float)
    total = int(values.size)
    if total == 0:
        return []

    lo = float(values.min())
    hi = float(values.max())
    # Work in halves so hi - lo cannot leave the float range
    half_width = (hi / 2 - lo / 2) / bin_count

    if half_width == 0:
        logger.debug("build_histogram: all %s values equal %s, using a single bin", total, lo)
        return [HistogramBin(bin_center=lo, count=int(total), frequency_percent=100.0)]

    indices = np.floor((values / 2 - lo / 2) / half_width).astype(np.int64)
    indices = np.clip(indices, 0, bin_count - 1)
    counts = np.bincount(indices, minlength=bin_count)

    return [
        HistogramBin(
            bin_center=2 * (lo / 2 + (i + 0.5) * half_width),
            count=int(count),
            frequency_percent=round(int(count) / total * 100, ROUND_FREQUENCY),
        )
        for i, count in enumerate(counts)
    ]
