import warnings

import numpy as np
import pytest

from monte_carlo_variability.errors import InvalidConfigError
from monte_carlo_variability.histogram import HistogramBin, build_histogram


class TestBuildHistogram:
    """Tests for fixed-width binning."""

    def test_counts_sum_to_total_for_any_bin_count(self):
        data = np.random.RandomState(11).normal(0.0, 1.0, size=1234)
        for bin_count in (1, 2, 7, 50, 333):
            bins = build_histogram(data, bin_count)
            assert len(bins) == bin_count
            assert sum(b.count for b in bins) == 1234

    def test_maximum_lands_in_last_bin(self):
        bins = build_histogram([float(i) for i in range(11)], bin_count=5)
        assert [b.count for b in bins] == [2, 2, 2, 2, 3]

    def test_bin_centers(self):
        bins = build_histogram([float(i) for i in range(11)], bin_count=5)
        assert [b.bin_center for b in bins] == pytest.approx([1.0, 3.0, 5.0, 7.0, 9.0])

    def test_frequency_percent_rounded(self):
        bins = build_histogram([float(i) for i in range(11)], bin_count=5)
        assert bins[0].frequency_percent == 18.18
        assert bins[-1].frequency_percent == 27.27

    def test_all_equal_values_use_single_bin(self):
        bins = build_histogram([3.5] * 20, bin_count=50)
        assert bins == [HistogramBin(bin_center=3.5, count=20, frequency_percent=100.0)]

    def test_empty_data(self):
        assert build_histogram([]) == []

    def test_default_bin_count_is_50(self):
        bins = build_histogram(np.linspace(0.0, 1.0, 1000))
        assert len(bins) == 50

    def test_range_wider_than_float_max(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            bins = build_histogram([-1e308, 0.0, 1e308], bin_count=2)
        assert [b.count for b in bins] == [1, 2]
        assert [b.bin_center for b in bins] == pytest.approx([-5e307, 5e307])

    def test_invalid_bin_count(self):
        with pytest.raises(InvalidConfigError):
            build_histogram([1.0, 2.0], bin_count=0)

    def test_to_dict(self):
        bin_ = HistogramBin(bin_center=1.5, count=3, frequency_percent=30.0)
        assert bin_.to_dict() == {"bin_center": 1.5, "count": 3, "frequency_percent": 30.0}
