"""Site percolation on square grids."""

from .disjoint_set import DisjointSet
from .grid import PercolationGrid
from .experiment import ExperimentRunner, NumpyUniformSource, run_experiments
from .statistics import StatisticsSummary, summarize

__all__ = [
    'DisjointSet', 'PercolationGrid', 'ExperimentRunner', 'NumpyUniformSource',
    'run_experiments', 'StatisticsSummary', 'summarize',
]
