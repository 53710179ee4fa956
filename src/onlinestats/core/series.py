"""
Series: one Weight driving one or more OnlineStats in lockstep.

Data flow:
    observation(s) -> Weight gives gamma -> every stat.update(x, gamma)

Every stat in a Series sees the same gamma sequence and the same number of
observations. The Series owns its Weight exclusively (it is copied on
construction), so advancing one Series never moves another's schedule.

Update modes:
    update(x)                          one observation, gamma from Weight
    update(x, gamma=g)                 override gamma, counter still moves
    update_batch(xs)                   replay each value in order
    update_batch(xs, gamma=g)          scalar or per-value override
    update_batch(xs, minibatch_size=b) chunks of b, one Weight step each

Ordering:
    Updates are sequential and order-dependent; the result depends on the
    caller's traversal order.
"""

import copy
from numbers import Real
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from loguru import logger

from onlinestats.core.weight import Weight, EqualWeight
from onlinestats.core.merge import merge as _merge
from onlinestats.constants import MERGE_APPEND
from onlinestats.errors import ConfigurationError, RangeError

GammaArg = Optional[Union[float, Sequence[float], np.ndarray]]


def check_gamma(gamma: Any) -> None:
    """
    Validate one mixing coefficient or an array of them.

    Raises:
        RangeError: If any value is outside (0, 1] or not finite
    """
    g = np.asarray(gamma, dtype=np.float64)
    if not (np.all(np.isfinite(g)) and np.all(g > 0.0) and np.all(g <= 1.0)):
        raise RangeError(f"gamma must be in (0, 1], got {gamma}")


def as_observation(x: Any) -> float:
    """
    Convert one observation to a float.

    Raises:
        ValueError: If x is not a single real number
    """
    if np.ndim(x) != 0:
        raise ValueError(
            f"Expected a single observation, got shape {np.shape(x)}; use update_batch"
        )
    return float(x)


class Series:
    """
    A bundle of one Weight and a fixed tuple of OnlineStats.

    Args:
        *stats: OnlineStat instances, updated in the given order
        weight: Weight schedule (default EqualWeight); a private copy is kept

    Attributes:
        nobs: Observations seen
        sample_mean: Plain average of every observation seen, independent
            of the Weight. A singleton merge feeds it to the target Series
            as one observation.

    Raises:
        ConfigurationError: If no stats are given

    Example:
        >>> from onlinestats import Series, Mean, Variance
        >>> s = Series(Mean(), Variance())
        >>> s.update_batch([1.0, 2.0, 3.0])
        >>> s.value()[0]
        2.0
    """

    def __init__(self, *stats: Any, weight: Optional[Weight] = None) -> None:
        if not stats:
            raise ConfigurationError("Series needs at least one OnlineStat")
        self._stats = tuple(stats)
        self.weight = copy.deepcopy(weight) if weight is not None else EqualWeight()
        self.nobs = 0
        self.sample_mean = 0.0
        logger.debug(
            "Series created: weight={}, stats={}",
            type(self.weight).__name__,
            [type(s).__name__ for s in self._stats],
        )

    @property
    def stats(self) -> Tuple[Any, ...]:
        return self._stats

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(self, x: Any, gamma: Optional[float] = None) -> None:
        """
        Update with a single observation.

        Args:
            x: New observation
            gamma: Optional override of the Weight's gamma for this call.
                The Weight counter still advances by one.

        Raises:
            RangeError: If gamma is outside (0, 1]
            ValueError: If x is not a single real number
        """
        x = as_observation(x)
        if gamma is not None:
            check_gamma(gamma)
        self._update_one(x, gamma)

    def _update_one(self, x: float, gamma: Optional[float]) -> None:
        g = self.weight.next()
        if gamma is not None:
            g = float(gamma)
        for stat in self._stats:
            stat.update(x, g)
        self.nobs += 1
        self.sample_mean += (x - self.sample_mean) / self.nobs

    def update_batch(
        self,
        xs: Any,
        gamma: GammaArg = None,
        minibatch_size: Optional[int] = None,
    ) -> None:
        """
        Update with an ordered sequence of observations.

        Args:
            xs: Observations, processed in order
            gamma: Scalar override reused for every value, or a sequence of
                overrides consumed pairwise with xs
            minibatch_size: Process xs in consecutive chunks of this size,
                each chunk one Weight step and one batched stat update

        Raises:
            ConfigurationError: If gamma and minibatch_size are both given
            RangeError: If a gamma is outside (0, 1], a gamma sequence does
                not match len(xs), or minibatch_size < 1
            ValueError: If xs cannot be read as real numbers
        """
        xs = np.asarray(xs, dtype=np.float64).ravel()

        if minibatch_size is not None:
            if gamma is not None:
                raise ConfigurationError(
                    "gamma override and minibatch_size are mutually exclusive"
                )
            self._update_minibatches(xs, minibatch_size)
            return

        if gamma is None:
            for x in xs:
                self._update_one(x, None)
            return

        if isinstance(gamma, Real):
            check_gamma(gamma)
            for x in xs:
                self._update_one(x, float(gamma))
            return

        gammas = np.asarray(gamma, dtype=np.float64).ravel()
        if len(gammas) != len(xs):
            raise RangeError(
                f"gamma sequence has length {len(gammas)}, expected {len(xs)}"
            )
        check_gamma(gammas)
        for x, g in zip(xs, gammas):
            self._update_one(x, float(g))

    def _update_minibatches(self, xs: np.ndarray, minibatch_size: int) -> None:
        if minibatch_size < 1:
            raise RangeError(f"minibatch_size must be >= 1, got {minibatch_size}")
        for start in range(0, len(xs), minibatch_size):
            chunk = xs[start:start + minibatch_size]
            g = self.weight.next_batch(len(chunk))
            for stat in self._stats:
                stat.update_batch(chunk, g)
            self.nobs += len(chunk)
            self.sample_mean += len(chunk) * (float(chunk.mean()) - self.sample_mean) / self.nobs

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def merge(self, other: 'Series', mode: Union[str, float] = MERGE_APPEND) -> 'Series':
        """Merge other into this Series in place; see onlinestats.core.merge."""
        return _merge(self, other, mode)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def value(self) -> Tuple[Any, ...]:
        """Per-stat results, in construction order."""
        return tuple(stat.value for stat in self._stats)

    def to_frame(self) -> pd.DataFrame:
        """
        Snapshot as a DataFrame.

        Returns:
            DataFrame with columns:
                - stat: Stat type name
                - nobs: Observations the stat has seen
                - value: The stat's current value
        """
        return pd.DataFrame(
            [
                {'stat': type(s).__name__, 'nobs': s.n, 'value': s.value}
                for s in self._stats
            ],
            columns=['stat', 'nobs', 'value'],
        )

    def __len__(self) -> int:
        return len(self._stats)

    def __repr__(self) -> str:
        names = ", ".join(type(s).__name__ for s in self._stats)
        return (
            f"Series({names}; weight={type(self.weight).__name__}, "
            f"nobs={self.nobs})"
        )


def fit(
    series: Series,
    data: Any,
    gamma: GammaArg = None,
    minibatch_size: Optional[int] = None,
) -> Series:
    """
    Fit a scalar observation or a sequence of observations.

    Scalars go through Series.update, anything else through
    Series.update_batch.

    Returns:
        The same Series, updated in place
    """
    if np.ndim(data) == 0:
        if minibatch_size is not None:
            raise ConfigurationError("minibatch_size needs a sequence of values")
        series.update(data, gamma)
    else:
        series.update_batch(data, gamma=gamma, minibatch_size=minibatch_size)
    return series


def value(series: Series) -> Tuple[Any, ...]:
    """Per-stat results of a Series."""
    return series.value()
