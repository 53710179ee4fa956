"""
Error taxonomy for online estimators.

All errors are raised eagerly at the offending call (construction, fit or
merge) and before any state is mutated, so a failed call leaves every
estimator exactly as it was.

Hierarchy:
    OnlineStatsError
        ConfigurationError  (also a ValueError)
        RangeError          (also a ValueError)
        TypeMismatchError   (also a TypeError)
"""


class OnlineStatsError(Exception):
    """Base class for all onlinestats errors."""


class ConfigurationError(OnlineStatsError, ValueError):
    """
    Invalid construction parameters.

    Examples: a Series with no stats, QuantileRegression with tau outside
    (0, 1), a response vector that does not have exactly two categories.
    """


class RangeError(OnlineStatsError, ValueError):
    """A mixing coefficient or merge ratio outside its valid bounds."""


class TypeMismatchError(OnlineStatsError, TypeError):
    """Merge between two structurally incompatible Series or stats."""
