"""
Exception taxonomy for the variability engine.

An empty parse is not an error: parse_csv returns an empty list and the
caller shows its zero state. Numeric degenerate cases (log of zero,
zero-width histogram, inverted uniform bounds) are absorbed by the samplers
and never raise.
"""


class MonteCarloError(Exception):
    """Base class for all engine errors."""


class NoInputDataError(MonteCarloError):
    """Simulation requested before a non-empty observation set exists."""

    def __init__(self, message="no observations to simulate from; parse some numeric data first"):
        super().__init__(message)


class InvalidConfigError(MonteCarloError, ValueError):
    """A configuration value cannot be clamped into a valid range."""


class SimulationCancelledError(MonteCarloError):
    """The caller asked the run to stop between aggregate batches."""

    def __init__(self, completed_draws: int, requested_draws: int):
        self.completed_draws = completed_draws
        self.requested_draws = requested_draws
        super().__init__(
            f"simulation cancelled after {completed_draws} of {requested_draws} draws"
        )
