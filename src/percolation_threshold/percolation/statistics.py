"""
Threshold statistics over a set of trial samples.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

# Normal-approximation quantile for a 95% interval
CONFIDENCE_Z = 1.96


@dataclass
class StatisticsSummary:
    """Mean, sample standard deviation and 95% confidence interval of T samples."""
    trials: int
    mean: float
    stddev: float
    confidence_lo: float
    confidence_hi: float

    def format_report(self) -> str:
        return (
            f"mean =                  {self.mean}\n"
            f"stddev =                {self.stddev}\n"
            f"95% confidence interval {self.confidence_lo}, {self.confidence_hi}"
        )


def summarize(samples: Sequence[float]) -> StatisticsSummary:
    """
    Summarize threshold samples.

    The standard deviation uses Bessel's correction (divides by T - 1), so a
    single sample yields NaN for stddev and both interval endpoints; numpy
    emits a RuntimeWarning in that case.

    Args:
        samples: One or more threshold samples

    Returns:
        StatisticsSummary
    """
    x = np.asarray(samples, dtype=np.float64)
    if x.size == 0:
        raise ValueError("Cannot summarize an empty sample set")

    t = x.size
    mean = float(np.mean(x))
    stddev = float(np.std(x, ddof=1))
    half_width = float(CONFIDENCE_Z * stddev / np.sqrt(t))

    return StatisticsSummary(
        trials=t,
        mean=mean,
        stddev=stddev,
        confidence_lo=mean - half_width,
        confidence_hi=mean + half_width,
    )
