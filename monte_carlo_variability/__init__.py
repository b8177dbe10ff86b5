"""
Monte Carlo data variability engine.

PURPOSE:
    Estimate how much a small empirical dataset (up to 100 observations)
    could plausibly vary, by fitting a Normal or Uniform model and
    resampling it thousands of times.

RESPONSIBILITIES:
    - Parse numeric observations from CSV-like text
    - Summarize observations and simulated samples
    - Draw aggregate and paired (per-observation) synthetic data
    - Bin, rank and export the results for a UI shell

SRP/DRY CHECK:
    Each submodule has a single responsibility:
    - csv_parser.py: Text to numbers only
    - summary_statistics.py: Descriptive statistics only
    - distributions.py: Normal/Uniform sampling only
    - histogram.py: Binning only
    - simulation.py: Run orchestration only
    - outputs.py: Result structure, export and formatting only
"""

from .csv_parser import parse_csv
from .distributions import RandomVariateGenerator, ReplayUniformSource, sample_normal, sample_uniform
from .errors import InvalidConfigError, MonteCarloError, NoInputDataError, SimulationCancelledError
from .histogram import HistogramBin, build_histogram
from .outputs import OutputFormatter, Percentiles, SampleDataset, SimulationResult, export_csv, export_filename
from .simulation import Distribution, MonteCarloSimulation, SimulationConfig, compute_percentiles, run_from_text
from .summary_statistics import StatisticsRecord, summarize

__version__ = "0.1.0"

__all__ = [
    "parse_csv",
    "summarize",
    "StatisticsRecord",
    "RandomVariateGenerator",
    "ReplayUniformSource",
    "sample_normal",
    "sample_uniform",
    "HistogramBin",
    "build_histogram",
    "Distribution",
    "SimulationConfig",
    "MonteCarloSimulation",
    "compute_percentiles",
    "run_from_text",
    "Percentiles",
    "SampleDataset",
    "SimulationResult",
    "OutputFormatter",
    "export_csv",
    "export_filename",
    "MonteCarloError",
    "NoInputDataError",
    "InvalidConfigError",
    "SimulationCancelledError",
]
