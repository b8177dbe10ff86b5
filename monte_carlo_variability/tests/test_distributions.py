"""
Unit tests for random variate generation.

STRATEGY:
    1. Pin the Box-Muller and interpolation formulas with replayed draws
    2. Verify the zero-draw guard and swapped uniform bounds
    3. Check seeded reproducibility
    4. Goodness-of-fit against scipy reference distributions
"""

import math
import unittest

import numpy as np
from scipy import stats

from monte_carlo_variability.config import MIN_UNIFORM
from monte_carlo_variability.distributions import (
    RandomVariateGenerator,
    ReplayUniformSource,
    sample_normal,
    sample_uniform,
)


class TestReplayedFormulas(unittest.TestCase):
    """Pin formulas against a deterministic uniform source."""

    def test_zero_draw_then_uniform(self):
        """Draws [0.0, 0.5, 0.999] give the guarded Box-Muller value, then 9.99."""
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.0, 0.5, 0.999]))

        normal_value = gen.normal(0.0, 1.0)
        expected = math.sqrt(-2.0 * math.log(MIN_UNIFORM)) * math.cos(2.0 * math.pi * 0.5)
        self.assertTrue(math.isfinite(normal_value))
        self.assertAlmostEqual(normal_value, expected, places=10)

        uniform_value = gen.uniform(0.0, 10.0)
        self.assertAlmostEqual(uniform_value, 9.99, places=12)

    def test_box_muller_scaling(self):
        """Result is z * std_dev + mean."""
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.25, 0.5]))
        z = math.sqrt(-2.0 * math.log(0.25)) * math.cos(math.pi)
        self.assertAlmostEqual(gen.normal(3.0, 2.0), z * 2.0 + 3.0, places=12)

    def test_vectorized_consumption_order(self):
        """With size=n, the first n draws are u1 and the next n are u2."""
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.1, 0.2, 0.3, 0.4]))
        values = gen.normal(0.0, 1.0, size=2)
        expected = [
            math.sqrt(-2.0 * math.log(0.1)) * math.cos(2.0 * math.pi * 0.3),
            math.sqrt(-2.0 * math.log(0.2)) * math.cos(2.0 * math.pi * 0.4),
        ]
        np.testing.assert_allclose(values, expected, rtol=1e-12)

    def test_array_means_shift_each_value(self):
        """An array of centers offsets each draw independently."""
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.5]))
        z = math.sqrt(-2.0 * math.log(0.5)) * math.cos(math.pi)
        values = gen.normal(np.array([1.0, 10.0, 100.0]), 2.0, size=3)
        np.testing.assert_allclose(values, [1.0 + 2 * z, 10.0 + 2 * z, 100.0 + 2 * z])

    def test_uniform_interpolation(self):
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.25]))
        self.assertEqual(gen.uniform(2.0, 6.0), 3.0)

    def test_uniform_swaps_inverted_bounds(self):
        """low > high is treated as [high, low]."""
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.25]))
        self.assertEqual(gen.uniform(10.0, 0.0), 2.5)

    def test_uniform_degenerate_range(self):
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.7]))
        self.assertEqual(gen.uniform(4.0, 4.0), 4.0)

    def test_zero_std_dev_returns_mean(self):
        gen = RandomVariateGenerator(source=ReplayUniformSource([0.3, 0.6]))
        self.assertEqual(gen.normal(5.0, 0.0), 5.0)

    def test_scalar_calls_return_float(self):
        gen = RandomVariateGenerator(random_state=1)
        self.assertIsInstance(gen.normal(0.0, 1.0), float)
        self.assertIsInstance(gen.uniform(0.0, 1.0), float)


class TestReplayUniformSource(unittest.TestCase):
    """Test the fixed-sequence source."""

    def test_cycles(self):
        source = ReplayUniformSource([0.1, 0.2])
        self.assertEqual([source.random() for _ in range(5)], [0.1, 0.2, 0.1, 0.2, 0.1])

    def test_array_draws(self):
        source = ReplayUniformSource([0.1, 0.2, 0.3])
        np.testing.assert_array_equal(source.random(4), [0.1, 0.2, 0.3, 0.1])

    def test_rejects_out_of_range_values(self):
        with self.assertRaises(ValueError):
            ReplayUniformSource([0.5, 1.0])
        with self.assertRaises(ValueError):
            ReplayUniformSource([-0.1])

    def test_rejects_empty_sequence(self):
        with self.assertRaises(ValueError):
            ReplayUniformSource([])


class TestSeededSampling(unittest.TestCase):
    """Test module-level wrappers and injected numpy sources."""

    def test_reproducibility_with_seed(self):
        """Same seed should produce identical samples."""
        samples1 = sample_normal(0.0, 1.0, size=100, random_state=42)
        samples2 = sample_normal(0.0, 1.0, size=100, random_state=42)
        np.testing.assert_array_equal(samples1, samples2)

        samples1 = sample_uniform(0.0, 1.0, size=100, random_state=42)
        samples2 = sample_uniform(0.0, 1.0, size=100, random_state=42)
        np.testing.assert_array_equal(samples1, samples2)

    def test_generator_source(self):
        """numpy Generator objects work as sources."""
        gen = RandomVariateGenerator(source=np.random.default_rng(3))
        samples = gen.uniform(-1.0, 1.0, size=500)
        self.assertEqual(samples.shape, (500,))
        self.assertTrue(np.all(samples >= -1.0))
        self.assertTrue(np.all(samples < 1.0))


class TestDistributionFit(unittest.TestCase):
    """Goodness-of-fit of generated samples."""

    def test_normal_matches_reference(self):
        samples = sample_normal(5.0, 2.0, size=5000, random_state=7)
        result = stats.kstest(samples, "norm", args=(5.0, 2.0))
        self.assertGreater(result.pvalue, 0.001)
        self.assertAlmostEqual(np.mean(samples), 5.0, delta=0.15)
        self.assertAlmostEqual(np.std(samples), 2.0, delta=0.15)

    def test_uniform_matches_reference(self):
        samples = sample_uniform(2.0, 8.0, size=5000, random_state=7)
        result = stats.kstest(samples, "uniform", args=(2.0, 6.0))
        self.assertGreater(result.pvalue, 0.001)
        self.assertTrue(np.all(samples >= 2.0))
        self.assertTrue(np.all(samples < 8.0))


if __name__ == "__main__":
    unittest.main()
