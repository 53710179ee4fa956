"""
Weighted running variance.

Mixture form of Welford's algorithm: the new data is treated as a
component with mean m and (population) variance v, mixed in with weight
gamma:

    delta  = m - mean
    mean  <- mean + gamma * delta
    var_b <- (1 - gamma) * var_b + gamma * v + gamma * (1 - gamma) * delta^2

A single observation is the component (x, 0); a minibatch is
(mean(xs), var(xs)); a merge is (other.mean, other.var_b). Under
EqualWeight this is exactly the population variance of everything seen.

Reference:
    Welford, B. P. (1962). "Note on a method for calculating
    corrected sums of squares and products"
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from onlinestats.core.stat import as_batch, check_same_type


@dataclass
class Variance:
    """
    Running mean and variance.

    Attributes:
        n: Number of observations seen
        mean: Running mean
        biased_var: Population (divide-by-n) variance estimate
    """
    n: int = 0
    mean: float = 0.0
    biased_var: float = 0.0

    def _mix(self, m: float, v: float, gamma: float, n: int) -> None:
        delta = m - self.mean
        self.mean += gamma * delta
        self.biased_var = (
            (1.0 - gamma) * self.biased_var
            + gamma * v
            + gamma * (1.0 - gamma) * delta * delta
        )
        self.n += n

    def update(self, x: float, gamma: float) -> None:
        self._mix(float(x), 0.0, gamma, 1)

    def update_batch(self, xs: np.ndarray, gamma: float) -> None:
        xs = as_batch(xs)
        if xs.size == 0:
            return
        self._mix(float(xs.mean()), float(xs.var()), gamma, xs.size)

    def merge(self, other: 'Variance', ratio: float, n: Optional[int] = None) -> None:
        check_same_type(self, other)
        self._mix(other.mean, other.biased_var, ratio, other.n if n is None else n)

    @property
    def var(self) -> float:
        """Sample (divide-by-(n-1)) variance."""
        if self.n < 2:
            return 0.0
        return self.biased_var * self.n / (self.n - 1)

    @property
    def std(self) -> float:
        """Sample standard deviation."""
        return float(np.sqrt(self.var))

    @property
    def value(self) -> float:
        return self.var
