"""
PURPOSE: Simulation configuration constants for the data variability engine.

RESPONSIBILITIES:
- Define simulation bounds and defaults (sample count, distribution, floor)
- Input ingestion limits
- Histogram, percentile and rounding parameters
- Single responsibility: configuration only, no simulation logic
"""

import numpy as np

# Input Ingestion
MAX_OBSERVATIONS = 100  # Values beyond the first 100 parsed are dropped

# Simulation Parameters
DEFAULT_SAMPLE_COUNT = 10000
MIN_SAMPLE_COUNT = 100
MAX_SAMPLE_COUNT = 1_000_000
DEFAULT_DISTRIBUTION = "normal"
RANDOM_SEED = None  # Set to int for reproducibility, None for random

# Floor Constraint
DEFAULT_FLOOR_ENABLED = True
DEFAULT_FLOOR_VALUE = 0.0

# Paired Sample Datasets
NUM_SAMPLE_DATASETS = 10
LOCAL_WINDOW_DIVISOR = 4  # Uniform half-window = (max - min) / 4

# Aggregate draws are generated in batches so a run can be cancelled between them
AGGREGATE_BATCH_SIZE = 100_000

# Box-Muller guard: u1 is clamped to this so log(u1) stays finite
MIN_UNIFORM = float(np.finfo(float).tiny)

# Draws beyond the float range saturate at +/- MAX_FLOAT
MAX_FLOAT = float(np.finfo(float).max)

# Histogram
HISTOGRAM_BINS = 50

# Percentile Outputs (fractions of the sorted sample)
PERCENTILES = [0.05, 0.25, 0.50, 0.75, 0.95]

# Output Configuration
ROUND_FREQUENCY = 2  # Decimal places for histogram frequency percentages
ROUND_STATISTIC = 4  # Decimal places for displayed statistics
PREVIEW_INPUT_VALUES = 5
PREVIEW_SAMPLE_VALUES = 3
PREVIEW_SAMPLE_DECIMALS = 2

# CSV Export
CSV_SEPARATOR = ",\n"
EXPORT_FILENAME_TEMPLATE = "monte_carlo_sample_{id}.csv"


def get_sample_count_bounds():
    """Return the inclusive (min, max) range accepted for sample_count."""
    return MIN_SAMPLE_COUNT, MAX_SAMPLE_COUNT


def get_percentile_levels():
    """Return percentile labels mapped to their sample fractions."""
    return {f"p{round(p * 100)}": p for p in PERCENTILES}
