"""
Weighted online-update engine.

Modules:
    - weight: Weight schedules turning update counts into gamma
    - stat: The OnlineStat capability and the Mean reference stat
    - series: Series orchestration (fit, value)
    - merge: Merge protocol between Series

Usage:
    >>> from onlinestats.core import Series, Mean, EqualWeight, fit, merge
    >>>
    >>> s = Series(Mean(), weight=EqualWeight())
    >>> fit(s, [1.0, 2.0, 3.0])
    >>> s.value()
    (2.0,)
"""

from onlinestats.core.weight import (
    Weight,
    EqualWeight,
    ExponentialWeight,
    BoundedEqualWeight,
    LearningRate,
)

from onlinestats.core.stat import (
    OnlineStat,
    Mean,
    check_same_type,
)

from onlinestats.core.merge import (
    merge,
    check_compatible,
)

from onlinestats.core.series import (
    Series,
    fit,
    value,
    check_gamma,
)

__all__ = [
    # Weights
    "Weight",
    "EqualWeight",
    "ExponentialWeight",
    "BoundedEqualWeight",
    "LearningRate",
    # Stat capability
    "OnlineStat",
    "Mean",
    "check_same_type",
    # Series
    "Series",
    "fit",
    "value",
    "check_gamma",
    # Merge
    "merge",
    "check_compatible",
]
