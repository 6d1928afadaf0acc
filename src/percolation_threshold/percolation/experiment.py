"""
Monte Carlo percolation trials.

A trial opens uniformly random blocked sites on a fresh grid until the grid
percolates and records the fraction of sites that were opened. Trials share
no state, so a run of T trials is T independent samples of the threshold.
"""

from typing import Callable, Optional, Sequence, Union

import numpy as np

from .grid import PercolationGrid

# uniform(low, high_exclusive) -> int
UniformSource = Callable[[int, int], int]


def draw_base_seed() -> int:
    """Draw a fresh base seed from OS entropy."""
    return int(np.random.SeedSequence().generate_state(1, dtype=np.uint32)[0])


class NumpyUniformSource:
    """
    Random-coordinate source backed by a numpy Generator.

    Args:
        seed: Anything accepted by np.random.default_rng (int, list of ints,
            SeedSequence or None for fresh entropy)
    """

    def __init__(self, seed: Optional[Union[int, Sequence[int], np.random.SeedSequence]] = None):
        self.rng = np.random.default_rng(seed)

    def __call__(self, low: int, high: int) -> int:
        return int(self.rng.integers(low, high))


class ExperimentRunner:
    """
    Runs repeated percolation trials on N-by-N grids.

    Without an explicit source, trial t draws from a generator seeded with
    [seed, t]. A trial therefore depends only on the base seed and its trial
    id, and the batch worker reproduces it exactly.

    Example:
        runner = ExperimentRunner(20, seed=42)
        samples = runner.run(100)
    """

    def __init__(self, n: int, source: Optional[UniformSource] = None, seed: Optional[int] = None):
        """
        Args:
            n: Grid side length (must be > 0)
            source: Callable uniform(low, high_exclusive) -> int shared by all
                trials. Defaults to per-trial NumpyUniformSource streams.
            seed: Non-negative base seed for the per-trial streams. If None,
                one is drawn from OS entropy. Ignored when source is given.
        """
        if n <= 0:
            raise ValueError(f"Grid size must be > 0, got n = {n}")
        if seed is not None and seed < 0:
            raise ValueError(f"Seed must be >= 0, got seed = {seed}")

        self.n = n
        self.source = source
        self.seed = draw_base_seed() if seed is None else int(seed)

    def trial_source(self, trial_id: int) -> UniformSource:
        if self.source is not None:
            return self.source
        return NumpyUniformSource([self.seed, trial_id])

    def open_until_percolation(self, trial_id: int = 0) -> int:
        """
        Open random blocked sites on a fresh grid until it percolates.

        A fully open grid always percolates, so at most n*n sites are opened.

        Returns:
            Number of sites open at first percolation
        """
        source = self.trial_source(trial_id)
        grid = PercolationGrid(self.n)
        while not grid.percolates():
            i = source(1, self.n + 1)
            j = source(1, self.n + 1)
            if not grid.is_open(i, j):
                grid.open(i, j)
        return grid.number_of_open_sites

    def run_trial(self, trial_id: int = 0) -> float:
        """Fraction of the n*n sites open at first percolation."""
        return self.open_until_percolation(trial_id) / (self.n * self.n)

    def run(self, trials: int) -> np.ndarray:
        """
        Run independent trials 0..trials-1, each on a fresh grid.

        Args:
            trials: Number of trials (must be > 0)

        Returns:
            Array of shape (trials,) with one threshold sample per trial
        """
        if trials <= 0:
            raise ValueError(f"Number of trials must be > 0, got trials = {trials}")

        return np.array([self.run_trial(t) for t in range(trials)], dtype=np.float64)


def run_experiments(n: int, trials: int, seed: Optional[int] = None) -> np.ndarray:
    """Run `trials` percolation trials on an n-by-n grid and return the samples."""
    return ExperimentRunner(n, seed=seed).run(trials)
