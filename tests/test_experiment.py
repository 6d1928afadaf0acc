"""Tests for percolation trials and statistics."""

import pytest
import numpy as np

from percolation_threshold.percolation.experiment import (
    ExperimentRunner, NumpyUniformSource, run_experiments,
)
from percolation_threshold.percolation.statistics import StatisticsSummary, summarize, CONFIDENCE_Z


class ScriptedSource:
    """Returns a fixed sequence of draws."""

    def __init__(self, values):
        self._values = iter(values)
        self.calls = []

    def __call__(self, low, high):
        self.calls.append((low, high))
        return next(self._values)


class TestExperimentRunner:
    """Tests for ExperimentRunner."""

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_grid_size(self, n):
        with pytest.raises(ValueError):
            ExperimentRunner(n)

    def test_invalid_trials(self):
        runner = ExperimentRunner(3, seed=0)

        with pytest.raises(ValueError):
            runner.run(0)

    def test_single_site_grid(self):
        """N=1 always percolates after exactly one open."""
        samples = ExperimentRunner(1, seed=0).run(5)

        assert samples.tolist() == [1.0] * 5

    def test_scripted_trial(self):
        """Drawn sites: (1,1), (1,1) again, (2,2), (1,2) -> 3 of 4 opened."""
        source = ScriptedSource([1, 1, 1, 1, 2, 2, 1, 2])
        runner = ExperimentRunner(2, source=source)

        sample = runner.run_trial()

        assert sample == pytest.approx(0.75)
        assert all(call == (1, 3) for call in source.calls)

    def test_samples_in_range(self):
        samples = ExperimentRunner(10, seed=1).run(20)

        assert samples.shape == (20,)
        assert np.all(samples > 0)
        assert np.all(samples <= 1)

    def test_minimum_fraction(self):
        """Percolation needs at least n open sites (one per row)."""
        n = 6
        samples = ExperimentRunner(n, seed=2).run(10)

        assert np.all(samples >= n / (n * n))

    def test_reproducible(self):
        a = run_experiments(8, 10, seed=42)
        b = run_experiments(8, 10, seed=42)

        np.testing.assert_array_equal(a, b)

    def test_trial_uses_own_stream(self):
        """Trial t draws from a generator seeded with [seed, t]."""
        runner = ExperimentRunner(6, seed=21)
        samples = runner.run(4)

        for t in range(4):
            single = ExperimentRunner(6, source=NumpyUniformSource([21, t])).run_trial()
            assert samples[t] == single
        assert runner.run_trial(2) == samples[2]

    def test_open_count(self):
        """The open count is an integer and matches the sample fraction."""
        runner = ExperimentRunner(5, seed=9)

        opened = runner.open_until_percolation(3)

        assert isinstance(opened, int)
        assert 5 <= opened <= 25
        assert runner.run_trial(3) == opened / 25

    def test_scripted_open_count(self):
        source = ScriptedSource([1, 1, 1, 1, 2, 2, 1, 2])

        assert ExperimentRunner(2, source=source).open_until_percolation() == 3

    def test_negative_seed(self):
        with pytest.raises(ValueError):
            ExperimentRunner(3, seed=-1)

    def test_drawn_seed(self):
        """Without a seed, one base seed is drawn and kept."""
        runner = ExperimentRunner(4)

        assert runner.seed >= 0
        assert runner.run_trial(1) == ExperimentRunner(4, seed=runner.seed).run_trial(1)

    def test_threshold_estimate(self):
        """The site percolation threshold on a square lattice is about 0.593."""
        samples = run_experiments(30, 100, seed=7)

        assert np.mean(samples) == pytest.approx(0.593, abs=0.03)


class TestNumpyUniformSource:
    """Tests for the numpy-backed coordinate source."""

    def test_range(self):
        source = NumpyUniformSource(0)
        draws = [source(1, 4) for _ in range(200)]

        assert set(draws) == {1, 2, 3}
        assert all(isinstance(d, int) for d in draws)

    def test_seed_sequence_list(self):
        a = NumpyUniformSource([5, 3])
        b = NumpyUniformSource([5, 3])

        assert [a(1, 100) for _ in range(10)] == [b(1, 100) for _ in range(10)]


class TestSummarize:
    """Tests for threshold statistics."""

    def test_known_values(self):
        stats = summarize([0.2, 0.4, 0.6])
        half = CONFIDENCE_Z * 0.2 / np.sqrt(3)

        assert isinstance(stats, StatisticsSummary)
        assert stats.trials == 3
        assert stats.mean == pytest.approx(0.4, abs=1e-9)
        assert stats.stddev == pytest.approx(0.2, abs=1e-9)
        assert stats.confidence_lo == pytest.approx(0.4 - half, abs=1e-9)
        assert stats.confidence_hi == pytest.approx(0.4 + half, abs=1e-9)

    def test_single_sample_stddev_nan(self):
        """Bessel's correction leaves one sample without a defined stddev."""
        with pytest.warns(RuntimeWarning):
            stats = summarize([0.5])

        assert stats.mean == 0.5
        assert np.isnan(stats.stddev)
        assert np.isnan(stats.confidence_lo)
        assert np.isnan(stats.confidence_hi)

    def test_empty(self):
        with pytest.raises(ValueError):
            summarize([])

    def test_interval_symmetric(self):
        stats = summarize(run_experiments(5, 30, seed=3))

        assert stats.confidence_lo <= stats.mean <= stats.confidence_hi
        assert stats.mean - stats.confidence_lo == pytest.approx(stats.confidence_hi - stats.mean)

    def test_format_report(self):
        report = summarize([0.25, 0.75]).format_report()
        lines = report.split('\n')

        assert len(lines) == 3
        assert lines[0] == "mean =                  0.5"
        assert lines[1].startswith("stddev =                ")
        assert lines[2].startswith("95% confidence interval ")
        assert "[" not in lines[2]

    def test_format_report_interval(self):
        stats = summarize([0.2, 0.4, 0.6])
        last = stats.format_report().split("\n")[2]

        assert last == f"95% confidence interval {stats.confidence_lo}, {stats.confidence_hi}"
