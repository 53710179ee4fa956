"""
Catalog of simple online statistics.

Each stat satisfies the OnlineStat capability (update, update_batch,
merge, value) and can be driven by a Series.

Modules:
    - variance: Weighted running variance
    - extrema: Running min/max
    - moments: First four moments, skewness, kurtosis
    - quantile: Approximate quantiles by stochastic gradient
    - summary: online_summary() convenience constructor
"""

from onlinestats.core.stat import Mean
from onlinestats.stats.variance import Variance
from onlinestats.stats.extrema import Extrema
from onlinestats.stats.moments import Moments
from onlinestats.stats.quantile import QuantileSGD
from onlinestats.stats.summary import online_summary

__all__ = [
    "Mean",
    "Variance",
    "Extrema",
    "Moments",
    "QuantileSGD",
    "online_summary",
]
