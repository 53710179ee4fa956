"""
Weight schedules for online updates.

A Weight turns the update count t into a mixing coefficient gamma(t) in
(0, 1]: how far each new observation (or minibatch) moves the running
sufficient statistics.

Variants:
    - EqualWeight:        gamma = 1 / t
    - ExponentialWeight:  gamma = lam
    - BoundedEqualWeight: gamma = max(1 / t, lam)
    - LearningRate:       gamma = max(1 / t^r, lam)

Counting:
    next() advances t by one observation. next_batch(n) also advances t by
    exactly one: the whole batch is a single time step, which is what makes
    a one-chunk minibatch fit agree with replaying the chunk under
    EqualWeight.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from onlinestats.constants import (
    DEFAULT_EXPONENTIAL_LAMBDA,
    DEFAULT_LEARNING_RATE_EXPONENT,
)
from onlinestats.errors import ConfigurationError, RangeError


@dataclass
class Weight(ABC):
    """
    Base weight schedule.

    Attributes:
        nobs: Number of time steps taken so far (t after the last next())
    """
    nobs: int = field(default=0, init=False)

    def gamma(self, t: int) -> float:
        """
        Mixing coefficient at time step t.

        Args:
            t: Time step, starting at 1

        Returns:
            gamma(t) in (0, 1]

        Raises:
            RangeError: If t < 1
        """
        if t < 1:
            raise RangeError(f"Time step must be >= 1, got {t}")
        return self._gamma(t)

    @abstractmethod
    def _gamma(self, t: int) -> float:
        ...

    def next(self) -> float:
        """Advance by one observation and return its gamma."""
        self.nobs += 1
        return self._gamma(self.nobs)

    def next_batch(self, n: int) -> float:
        """
        Advance by one minibatch of n observations and return its gamma.

        The counter moves by 1 regardless of n.

        Raises:
            RangeError: If n < 1
        """
        if n < 1:
            raise RangeError(f"Minibatch size must be >= 1, got {n}")
        self.nobs += 1
        return self._gamma(self.nobs)

    def reset(self) -> None:
        self.nobs = 0


@dataclass
class EqualWeight(Weight):
    """Every observation gets equal influence: gamma = 1 / t."""

    def _gamma(self, t: int) -> float:
        return 1.0 / t


@dataclass
class ExponentialWeight(Weight):
    """
    Constant mixing coefficient: gamma = lam.

    Older observations decay geometrically at rate (1 - lam).
    """
    lam: float = DEFAULT_EXPONENTIAL_LAMBDA

    def __post_init__(self) -> None:
        if not 0.0 < self.lam <= 1.0:
            raise ConfigurationError(f"lam must be in (0, 1], got {self.lam}")

    @classmethod
    def from_lookback(cls, lookback: int) -> 'ExponentialWeight':
        """
        Build from a lookback window k: lam = 2 / (k + 1).

        Example:
            >>> ExponentialWeight.from_lookback(19).lam
            0.1
        """
        if lookback < 1:
            raise ConfigurationError(f"lookback must be >= 1, got {lookback}")
        return cls(lam=2.0 / (lookback + 1))

    def _gamma(self, t: int) -> float:
        return self.lam


@dataclass
class BoundedEqualWeight(Weight):
    """
    Equal weighting until 1 / t drops to lam, then constant lam.

    gamma(t) -> lam as t grows, never below it.
    """
    lam: float = DEFAULT_EXPONENTIAL_LAMBDA

    def __post_init__(self) -> None:
        if not 0.0 < self.lam <= 1.0:
            raise ConfigurationError(f"lam must be in (0, 1], got {self.lam}")

    def _gamma(self, t: int) -> float:
        return max(1.0 / t, self.lam)


@dataclass
class LearningRate(Weight):
    """
    Polynomially decaying weight: gamma = max(1 / t^r, lam).

    r = 1 with lam = 0 reproduces EqualWeight; smaller r keeps more
    influence on recent observations.
    """
    r: float = DEFAULT_LEARNING_RATE_EXPONENT
    lam: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 < self.r <= 1.0:
            raise ConfigurationError(f"r must be in (0, 1], got {self.r}")
        if not 0.0 <= self.lam <= 1.0:
            raise ConfigurationError(f"lam must be in [0, 1], got {self.lam}")

    def _gamma(self, t: int) -> float:
        return max(1.0 / t ** self.r, self.lam)
