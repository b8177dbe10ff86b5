"""
PURPOSE: Result value objects and presentation-facing helpers.

This module holds the immutable outputs of a simulation run and the small
conversions a UI shell needs: JSON-ready dicts, value previews, a plain
English summary, and CSV export of sample datasets.

SRP/DRY: Single responsibility = result structure and formatting.
         No sampling, no statistics computation.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Tuple

import numpy as np

from monte_carlo_variability.config import (
    CSV_SEPARATOR,
    EXPORT_FILENAME_TEMPLATE,
    PREVIEW_INPUT_VALUES,
    PREVIEW_SAMPLE_DECIMALS,
    PREVIEW_SAMPLE_VALUES,
    ROUND_STATISTIC,
)
from monte_carlo_variability.histogram import HistogramBin
from monte_carlo_variability.summary_statistics import StatisticsRecord

if TYPE_CHECKING:
    from monte_carlo_variability.simulation import SimulationConfig


@dataclass(frozen=True)
class Percentiles:
    """Order statistics of the sorted aggregate sample."""
    p5: float
    p25: float
    p50: float
    p75: float
    p95: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "p5": self.p5,
            "p25": self.p25,
            "p50": self.p50,
            "p75": self.p75,
            "p95": self.p95,
        }


@dataclass(frozen=True)
class SampleDataset:
    """One paired synthetic dataset.

    Attributes:
        id (int): 1-based position among the generated datasets.
        data (tuple): One value per original observation, in the same order.
        stats (StatisticsRecord): Summary of `data`.
    """
    id: int
    data: Tuple[float, ...]
    stats: StatisticsRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "data": list(self.data),
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Complete output of one MonteCarloSimulation.run() call.

    Attributes:
        raw_samples (np.ndarray): Read-only aggregate draws, in draw order.
        aggregate_stats (StatisticsRecord): Summary of raw_samples.
        histogram (tuple): HistogramBin entries, low to high.
        percentiles (Percentiles): P5/P25/P50/P75/P95 of raw_samples.
        sample_datasets (tuple): SampleDataset entries with ids 1..N.
        config (SimulationConfig): Configuration the run used.
        input_stats (StatisticsRecord): Summary of the observations.
    """
    raw_samples: np.ndarray
    aggregate_stats: StatisticsRecord
    histogram: Tuple[HistogramBin, ...]
    percentiles: Percentiles
    sample_datasets: Tuple[SampleDataset, ...]
    config: "SimulationConfig"
    input_stats: StatisticsRecord

    @property
    def sample_count(self) -> int:
        return int(self.raw_samples.size)

    def to_dict(self, include_raw: bool = False) -> Dict[str, Any]:
        """Convert results to dictionary for JSON serialization.

        The raw sample array can hold a million values, so it is only
        included when `include_raw` is set.
        """
        result = {
            "config": self.config.model_dump(mode="json"),
            "input_stats": self.input_stats.to_dict(),
            "stats": self.aggregate_stats.to_dict(),
            "range": round(self.aggregate_stats.range, ROUND_STATISTIC),
            "histogram": [b.to_dict() for b in self.histogram],
            "percentiles": {k: round(v, ROUND_STATISTIC) for k, v in self.percentiles.to_dict().items()},
            "sample_datasets": [d.to_dict() for d in self.sample_datasets],
        }
        if include_raw:
            result["raw"] = self.raw_samples.tolist()
        return result


def export_csv(dataset: SampleDataset) -> str:
    """Join dataset values with ",\\n" (no header, no trailing separator)."""
    return CSV_SEPARATOR.join(repr(float(v)) for v in dataset.data)


def export_filename(dataset: SampleDataset) -> str:
    """Suggested download filename for a sample dataset."""
    return EXPORT_FILENAME_TEMPLATE.format(id=dataset.id)


class OutputFormatter:
    """Text helpers for displaying observations and simulation results."""

    @staticmethod
    def preview_values(
        values: Sequence[float],
        limit: int = PREVIEW_INPUT_VALUES,
        decimals: Optional[int] = None,
    ) -> str:
        """
        Show the first `limit` values joined by ", ", with "..." when truncated.

        Args:
            values: Values to preview.
            limit: Number of values to show.
            decimals: Fixed decimal places, or None for the shortest repr.

        Returns:
            Preview string, empty for empty input.
        """
        shown = list(values[:limit])
        if decimals is None:
            parts = [OutputFormatter._format_plain(v) for v in shown]
        else:
            parts = [f"{float(v):.{decimals}f}" for v in shown]
        text = ", ".join(parts)
        if len(values) > limit:
            text += "..."
        return text

    @staticmethod
    def preview_dataset(dataset: SampleDataset) -> str:
        """Short preview of a sample dataset, as shown in its table row."""
        return OutputFormatter.preview_values(
            dataset.data, limit=PREVIEW_SAMPLE_VALUES, decimals=PREVIEW_SAMPLE_DECIMALS
        )

    @staticmethod
    def format_summary(result: SimulationResult) -> str:
        """
        Generate a plain English summary of a simulation run.

        Args:
            result: SimulationResult from MonteCarloSimulation.run().

        Returns:
            Multi-sentence narrative string.
        """
        config = result.config
        stats = result.aggregate_stats
        pct = result.percentiles

        narrative = (
            f"Ran {result.sample_count:,} simulations from a "
            f"{config.distribution.value} model fitted to {result.input_stats.count} observations. "
        )
        if config.floor_enabled:
            narrative += f"Values below {config.floor_value:g} were raised to {config.floor_value:g}. "
        narrative += f"Mean: {stats.mean:.4f}. "
        narrative += f"Std Dev: {stats.std_dev:.4f}. "
        narrative += f"Range: {stats.min:.4f} to {stats.max:.4f} (width {stats.range:.4f}). "
        narrative += f"90% of simulated values fall between {pct.p5:.4f} (P5) and {pct.p95:.4f} (P95). "
        narrative += (
            f"Generated {len(result.sample_datasets)} sample datasets of "
            f"{result.input_stats.count} points each."
        )
        return narrative

    @staticmethod
    def _format_plain(value: float) -> str:
        value = float(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)
