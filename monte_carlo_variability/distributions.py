"""
PURPOSE: Random variate generation over an injectable uniform source.

RESPONSIBILITIES:
- Sample Normal values with the Box-Muller transform
- Sample Uniform values by linear interpolation between bounds
- Replay a fixed sequence of uniform draws for deterministic runs
- Single responsibility: only sampling, no aggregation or I/O

The uniform source is any object exposing `random(size=None)` that returns
floats in [0, 1). numpy.random.RandomState and numpy.random.Generator both
qualify.
"""

from typing import Optional, Protocol, Sequence, Union

import numpy as np

from monte_carlo_variability.config import MAX_FLOAT, MIN_UNIFORM

ArrayLike = Union[float, np.ndarray]


class UniformSource(Protocol):
    def random(self, size: Optional[int] = None) -> ArrayLike:
        ...


class ReplayUniformSource:
    """Uniform source that cycles through a fixed sequence of draws."""

    def __init__(self, values: Sequence[float]):
        values = [float(v) for v in values]
        if not values:
            raise ValueError("values must not be empty")
        for v in values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"uniform draws must be in [0, 1), got {v}")
        self._values = values
        self._position = 0

    def _next(self) -> float:
        value = self._values[self._position]
        self._position = (self._position + 1) % len(self._values)
        return value

    def random(self, size: Optional[int] = None) -> ArrayLike:
        if size is None:
            return self._next()
        return np.array([self._next() for _ in range(size)], dtype=float)


class RandomVariateGenerator:
    """Draws Normal and Uniform variates from a uniform [0, 1) source."""

    def __init__(self, source: Optional[UniformSource] = None, random_state: Optional[int] = None):
        """
        Args:
            source: Uniform draw provider. Defaults to a
                numpy RandomState seeded with `random_state`.
            random_state: Seed for the default source (None = random).
        """
        self.source = source if source is not None else np.random.RandomState(random_state)

    def normal(self, mean: ArrayLike, std_dev: float, size: Optional[int] = None) -> ArrayLike:
        """
        Sample from a Normal distribution via Box-Muller.

        z = sqrt(-2 ln u1) * cos(2 pi u2), returned as z * std_dev + mean.
        A scalar call consumes u1 then u2. With `size` set, `size` draws are
        taken for u1 followed by `size` draws for u2, and `mean` may be an
        array of per-value centers.

        Args:
            mean: Center of the distribution (scalar or array of length `size`)
            std_dev: Spread of the distribution
            size: Number of samples, or None for a single float

        Returns:
            float or ndarray of samples
        """
        u1 = np.maximum(self.source.random(size), MIN_UNIFORM)
        u2 = self.source.random(size)
        z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
        with np.errstate(over="ignore"):
            samples = z * std_dev + mean
        # Draws past the float range saturate at its edges
        samples = np.clip(samples, -MAX_FLOAT, MAX_FLOAT)
        if size is None:
            return float(samples)
        return samples

    def uniform(self, low: ArrayLike, high: ArrayLike, size: Optional[int] = None) -> ArrayLike:
        """
        Sample from a Uniform distribution: low + r * (high - low).

        Bounds given in the wrong order are swapped.

        Args:
            low: Lower bound (scalar or array)
            high: Upper bound (scalar or array)
            size: Number of samples, or None for a single float

        Returns:
            float or ndarray of samples
        """
        low, high = np.minimum(low, high), np.maximum(low, high)
        r = self.source.random(size)
        # Evaluated at half scale so high - low cannot overflow
        half_span = high / 2 - low / 2
        samples = 2 * (low / 2 + r * half_span)
        if size is None:
            return float(samples)
        return samples


# Module-level convenience functions for direct import
def sample_normal(mean, std_dev, size=None, random_state=None):
    """Module-level wrapper for Box-Muller normal sampling."""
    return RandomVariateGenerator(random_state=random_state).normal(mean, std_dev, size=size)


def sample_uniform(low, high, size=None, random_state=None):
    """Module-level wrapper for uniform sampling."""
    return RandomVariateGenerator(random_state=random_state).uniform(low, high, size=size)
