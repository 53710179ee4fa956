"""
Running first four moments.

Tracks the raw moments E[x], E[x^2], E[x^3], E[x^4] with the standard
weighted update and derives mean, variance, skewness and excess kurtosis
from them. Skewness and kurtosis use the biased (population) definitions,
the same as scipy.stats.skew and scipy.stats.kurtosis with default
arguments.

Note:
    Raw moments lose precision when |mean| is large relative to the
    spread. Center the data first if that matters.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from onlinestats.core.stat import as_batch, check_same_type

_POWERS = np.arange(1, 5)


@dataclass(eq=False)
class Moments:
    """
    Running raw moments.

    Attributes:
        n: Number of observations seen
        m: Raw moments [E[x], E[x^2], E[x^3], E[x^4]]
    """
    n: int = 0
    m: np.ndarray = field(default_factory=lambda: np.zeros(4))

    def update(self, x: float, gamma: float) -> None:
        powers = float(x) ** _POWERS
        self.n += 1
        self.m += gamma * (powers - self.m)

    def update_batch(self, xs: np.ndarray, gamma: float) -> None:
        xs = as_batch(xs)
        if xs.size == 0:
            return
        self.n += xs.size
        batch_m = (xs[:, None] ** _POWERS).mean(axis=0)
        self.m += gamma * (batch_m - self.m)

    def merge(self, other: 'Moments', ratio: float, n: Optional[int] = None) -> None:
        check_same_type(self, other)
        self.m += ratio * (other.m - self.m)
        self.n += other.n if n is None else n

    @property
    def mean(self) -> float:
        return float(self.m[0])

    @property
    def _central2(self) -> float:
        m1, m2 = self.m[0], self.m[1]
        return float(max(m2 - m1 * m1, 0.0))

    @property
    def var(self) -> float:
        """Sample (divide-by-(n-1)) variance."""
        if self.n < 2:
            return 0.0
        return self._central2 * self.n / (self.n - 1)

    @property
    def std(self) -> float:
        return float(np.sqrt(self.var))

    @property
    def skewness(self) -> float:
        s2 = self._central2
        if s2 == 0.0:
            return 0.0
        m1, m2, m3 = self.m[0], self.m[1], self.m[2]
        central3 = m3 - 3.0 * m1 * m2 + 2.0 * m1 ** 3
        return float(central3 / s2 ** 1.5)

    @property
    def kurtosis(self) -> float:
        """Excess kurtosis (0 for a normal distribution)."""
        s2 = self._central2
        if s2 == 0.0:
            return 0.0
        m1, m2, m3, m4 = self.m
        central4 = m4 - 4.0 * m1 * m3 + 6.0 * m1 * m1 * m2 - 3.0 * m1 ** 4
        return float(central4 / (s2 * s2) - 3.0)

    @property
    def value(self) -> Tuple[float, float, float, float]:
        return (self.mean, self.var, self.skewness, self.kurtosis)
