"""
Summary series: mean, variance, extrema and quartiles in one pass.

Usage:
    >>> ob = online_summary(x1)
    >>> ob.update_batch(x2)         # x2's values appended one at a time
    >>> mean, var, (lo, hi), (q1, med, q3) = ob.value()
"""

from typing import Any, Optional

from onlinestats.core.series import Series
from onlinestats.core.stat import Mean
from onlinestats.core.weight import Weight
from onlinestats.stats.extrema import Extrema
from onlinestats.stats.quantile import QuantileSGD
from onlinestats.stats.variance import Variance


def online_summary(values: Any = None, weight: Optional[Weight] = None) -> Series:
    """
    Build a Series(Mean, Variance, Extrema, QuantileSGD) and fit values into it.

    Args:
        values: Optional initial observations, fitted one at a time
        weight: Weight schedule (default EqualWeight)

    Returns:
        The fitted Series; value() is
        (mean, var, (min, max), (q25, q50, q75)). The quartiles are
        stochastic approximations.

    Example:
        >>> ob = online_summary([1.0, 2.0, 3.0, 4.0])
        >>> mean, var, (lo, hi), quartiles = ob.value()
        >>> mean, lo, hi
        (2.5, 1.0, 4.0)
    """
    series = Series(Mean(), Variance(), Extrema(), QuantileSGD(), weight=weight)
    if values is not None:
        series.update_batch(values)
    return series
