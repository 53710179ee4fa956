"""
Approximate quantiles by stochastic gradient descent.

Each estimate q_j moves against the gradient of the check loss at its
level tau_j, the same gradient QuantileRegression uses:

    q_j <- q_j - gamma * (1{x < q_j} - tau_j)

A minibatch replaces the indicator by the fraction of the chunk below q_j.
The first data seen initializes the estimates (the observation itself, or
the exact quantiles of the first chunk), so the estimates start inside the
data's range.

Estimates are approximate and depend on the Weight schedule. EqualWeight
gives step sizes 1/t, which converge for densities that are not too flat
around the quantile; LearningRate(r < 1) adapts faster to drifting data.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from onlinestats.constants import DEFAULT_QUANTILE_LEVELS
from onlinestats.core.stat import as_batch, check_same_type
from onlinestats.errors import ConfigurationError, TypeMismatchError


@dataclass(eq=False)
class QuantileSGD:
    """
    Running approximate quantiles.

    Args:
        taus: Quantile levels, each strictly between 0 and 1

    Attributes:
        n: Number of observations seen
        est: Current estimates, one per level

    Raises:
        ConfigurationError: If taus is empty or a level is outside (0, 1)

    Example:
        >>> s = Series(QuantileSGD((0.1, 0.9)))
        >>> s.update_batch(data)
        >>> lo, hi = s.value()[0]
    """
    taus: Sequence[float] = DEFAULT_QUANTILE_LEVELS
    n: int = 0
    est: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.taus = np.asarray(self.taus, dtype=np.float64).ravel()
        if self.taus.size == 0:
            raise ConfigurationError("QuantileSGD needs at least one level")
        if not np.all((self.taus > 0.0) & (self.taus < 1.0)):
            raise ConfigurationError(f"Quantile levels must be in (0, 1), got {self.taus.tolist()}")
        if self.est is None:
            self.est = np.zeros(self.taus.size)

    def update(self, x: float, gamma: float) -> None:
        x = float(x)
        if self.n == 0:
            self.est = np.full(self.taus.size, x)
        else:
            self.est -= gamma * ((x < self.est) - self.taus)
        self.n += 1

    def update_batch(self, xs: np.ndarray, gamma: float) -> None:
        xs = as_batch(xs)
        if xs.size == 0:
            return
        if self.n == 0:
            self.est = np.quantile(xs, self.taus)
        else:
            below = (xs[:, None] < self.est).mean(axis=0)
            self.est -= gamma * (below - self.taus)
        self.n += xs.size

    def check_mergeable(self, other: 'QuantileSGD') -> None:
        """
        Require the same type and the same quantile levels.

        Raises:
            TypeMismatchError: If other tracks different levels
        """
        check_same_type(self, other)
        if not np.array_equal(self.taus, other.taus):
            raise TypeMismatchError(
                f"Cannot merge quantile levels {other.taus.tolist()} into {self.taus.tolist()}"
            )

    def merge(self, other: 'QuantileSGD', ratio: float, n: Optional[int] = None) -> None:
        self.check_mergeable(other)
        self.est += ratio * (other.est - self.est)
        self.n += other.n if n is None else n

    @property
    def value(self) -> Tuple[float, ...]:
        return tuple(float(q) for q in self.est)
