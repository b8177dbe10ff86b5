"""
PURPOSE: Core Monte Carlo engine for data variability analysis.

Fits a Normal or Uniform model to a small observation set, draws an
aggregate sample of up to 1,000,000 values, and generates paired sample
datasets that perturb each observation in place.

SINGLE RESPONSIBILITY:
- Validate the simulation configuration
- Run aggregate and paired generation with the floor constraint
- Assemble statistics, histogram and percentiles into a SimulationResult

CONSTRAINTS:
- Does NOT handle file I/O or rendering
- Does NOT modify the observations; reads only
"""

import logging
import math
from enum import Enum
from typing import Callable, List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from monte_carlo_variability.config import (
    AGGREGATE_BATCH_SIZE,
    DEFAULT_DISTRIBUTION,
    DEFAULT_FLOOR_ENABLED,
    DEFAULT_FLOOR_VALUE,
    DEFAULT_SAMPLE_COUNT,
    HISTOGRAM_BINS,
    LOCAL_WINDOW_DIVISOR,
    MAX_OBSERVATIONS,
    NUM_SAMPLE_DATASETS,
    RANDOM_SEED,
    get_percentile_levels,
    get_sample_count_bounds,
)
from monte_carlo_variability.csv_parser import parse_csv
from monte_carlo_variability.distributions import RandomVariateGenerator, UniformSource
from monte_carlo_variability.errors import (
    InvalidConfigError,
    NoInputDataError,
    SimulationCancelledError,
)
from monte_carlo_variability.histogram import build_histogram
from monte_carlo_variability.outputs import Percentiles, SampleDataset, SimulationResult
from monte_carlo_variability.summary_statistics import StatisticsRecord, summarize

logger = logging.getLogger(__name__)


class Distribution(str, Enum):
    NORMAL = "normal"
    UNIFORM = "uniform"


class SimulationConfig(BaseModel):
    """
    Parameters of one simulation run.

    sample_count outside [MIN_SAMPLE_COUNT, MAX_SAMPLE_COUNT] is clamped to
    the nearest bound. A non-finite floor_value is rejected.
    """
    model_config = ConfigDict(frozen=True)

    sample_count: int = DEFAULT_SAMPLE_COUNT
    distribution: Distribution = Distribution(DEFAULT_DISTRIBUTION)
    floor_enabled: bool = DEFAULT_FLOOR_ENABLED
    floor_value: float = DEFAULT_FLOOR_VALUE

    @field_validator("sample_count")
    @classmethod
    def _clamp_sample_count(cls, value: int) -> int:
        low, high = get_sample_count_bounds()
        clamped = min(max(value, low), high)
        if clamped != value:
            logger.warning("sample_count %s outside [%s, %s], clamped to %s", value, low, high, clamped)
        return clamped

    @field_validator("floor_value")
    @classmethod
    def _check_floor_value(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError(f"floor_value must be finite, got {value}")
        return value

    @classmethod
    def from_options(cls, **options) -> "SimulationConfig":
        """Build a config, reporting validation failures as InvalidConfigError."""
        try:
            return cls(**options)
        except ValidationError as e:
            raise InvalidConfigError(str(e)) from e


class MonteCarloSimulation:
    """
    Monte Carlo engine for resampling a small observation set.

    Each run:
    - Summarizes the observations (mean, std dev, min, max, ...)
    - Draws sample_count aggregate values from the fitted distribution
    - Draws NUM_SAMPLE_DATASETS paired datasets, one value per observation
    - Clamps every draw up to floor_value when the floor is enabled
    - Summarizes the aggregate draws into statistics, histogram, percentiles
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        random_state: Optional[int] = RANDOM_SEED,
        source: Optional[UniformSource] = None,
    ):
        """
        Initialize simulation engine.

        Args:
            config: Simulation parameters (defaults to SimulationConfig())
            random_state: Seed for the default random source (None = random)
            source: Uniform draw provider; overrides random_state when given
        """
        self.config = config if config is not None else SimulationConfig()
        self.generator = RandomVariateGenerator(source=source, random_state=random_state)

    def run(
        self,
        observations: Sequence[float],
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> SimulationResult:
        """
        Execute the simulation on an observation set.

        Args:
            observations: Parsed numeric values (see parse_csv). Only the
                first MAX_OBSERVATIONS are used; extras are dropped with a
                warning, as parse_csv does.
            should_cancel: Optional callable polled between aggregate batches;
                returning True aborts the run

        Returns:
            SimulationResult

        Raises:
            NoInputDataError: if observations is empty
            ValueError: if any observation is not finite
            SimulationCancelledError: if should_cancel asked to stop
        """
        if len(observations) > MAX_OBSERVATIONS:
            logger.warning(
                "%s observations given, using the first %s", len(observations), MAX_OBSERVATIONS
            )
            observations = observations[:MAX_OBSERVATIONS]

        input_stats = summarize(observations)
        if input_stats is None:
            raise NoInputDataError()
        if not np.all(np.isfinite(np.asarray(observations, dtype=float))):
            raise ValueError("observations must all be finite numbers")

        config = self.config
        logger.info(
            "Running %s %s simulations on %s observations (floor: %s)",
            config.sample_count,
            config.distribution.value,
            input_stats.count,
            config.floor_value if config.floor_enabled else "off",
        )

        raw_samples = self.run_aggregate(input_stats, should_cancel=should_cancel)
        sample_datasets = self.run_paired(observations, input_stats)

        aggregate_stats = summarize(raw_samples)
        histogram = build_histogram(raw_samples, HISTOGRAM_BINS)
        percentiles = compute_percentiles(raw_samples)

        raw_samples.flags.writeable = False
        logger.info(
            "Simulation complete: mean=%.4f std_dev=%.4f p50=%.4f",
            aggregate_stats.mean,
            aggregate_stats.std_dev,
            percentiles.p50,
        )

        return SimulationResult(
            raw_samples=raw_samples,
            aggregate_stats=aggregate_stats,
            histogram=tuple(histogram),
            percentiles=percentiles,
            sample_datasets=tuple(sample_datasets),
            config=config,
            input_stats=input_stats,
        )

    def run_aggregate(
        self,
        input_stats: StatisticsRecord,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> np.ndarray:
        """
        Draw sample_count independent values from the fitted distribution.

        Args:
            input_stats: Summary of the observations
            should_cancel: Optional callable polled before each batch

        Returns:
            ndarray of sample_count values, floor applied
        """
        total = self.config.sample_count
        samples = np.empty(total)
        done = 0
        while done < total:
            if should_cancel is not None and should_cancel():
                logger.info("Simulation cancelled after %s of %s draws", done, total)
                raise SimulationCancelledError(done, total)
            batch = min(AGGREGATE_BATCH_SIZE, total - done)
            samples[done:done + batch] = self._draw(
                input_stats.mean, input_stats.min, input_stats.max, input_stats.std_dev, batch
            )
            done += batch

        logger.debug("Drew %s aggregate samples", total)
        return self._apply_floor(samples)

    def run_paired(
        self,
        observations: Sequence[float],
        input_stats: StatisticsRecord,
    ) -> List[SampleDataset]:
        """
        Generate NUM_SAMPLE_DATASETS datasets that perturb each observation.

        Value j of every dataset is centered on observations[j]. Normal draws
        use the global std dev. Uniform draws use a window of
        +/- (max - min) / LOCAL_WINDOW_DIVISOR around the observation,
        intersected with [min, max].

        Args:
            observations: Original values, in order
            input_stats: Summary of the observations

        Returns:
            List of SampleDataset with ids 1..NUM_SAMPLE_DATASETS
        """
        centers = np.asarray(observations, dtype=float)
        n = centers.size
        half_window = input_stats.max / LOCAL_WINDOW_DIVISOR - input_stats.min / LOCAL_WINDOW_DIVISOR
        with np.errstate(over="ignore"):
            local_min = np.maximum(centers - half_window, input_stats.min)
            local_max = np.minimum(centers + half_window, input_stats.max)

        datasets = []
        for dataset_id in range(1, NUM_SAMPLE_DATASETS + 1):
            values = self._draw(centers, local_min, local_max, input_stats.std_dev, n)
            values = self._apply_floor(values)
            datasets.append(
                SampleDataset(
                    id=dataset_id,
                    data=tuple(float(v) for v in values),
                    stats=summarize(values),
                )
            )

        logger.debug("Generated %s paired datasets of %s points", NUM_SAMPLE_DATASETS, n)
        return datasets

    def _draw(self, center, low, high, std_dev: float, size: int) -> np.ndarray:
        if self.config.distribution == Distribution.NORMAL:
            return self.generator.normal(center, std_dev, size=size)
        return self.generator.uniform(low, high, size=size)

    def _apply_floor(self, values: np.ndarray) -> np.ndarray:
        """Raise values below floor_value up to floor_value."""
        if not self.config.floor_enabled:
            return values
        return np.maximum(values, self.config.floor_value)


def compute_percentiles(samples: np.ndarray) -> Percentiles:
    """
    Read percentiles from a single ascending sort of `samples`.

    The value for level p is sorted[floor(n * p)].
    """
    ordered = np.sort(samples)
    n = ordered.size
    values = {
        label: float(ordered[min(math.floor(n * p), n - 1)])
        for label, p in get_percentile_levels().items()
    }
    return Percentiles(**values)


def run_from_text(
    text: str,
    config: Optional[SimulationConfig] = None,
    random_state: Optional[int] = RANDOM_SEED,
) -> SimulationResult:
    """Parse CSV-like text and simulate from the resulting observations."""
    observations = parse_csv(text)
    return MonteCarloSimulation(config=config, random_state=random_state).run(observations)
