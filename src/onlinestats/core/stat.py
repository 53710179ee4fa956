"""
The OnlineStat capability and its reference instance.

Any estimator can take part in a Series by exposing:

    n                          observations seen
    update(x, gamma)           mix one observation in with weight gamma
    update_batch(xs, gamma)    mix a whole minibatch in as one step
    merge(other, ratio, n)     mix another estimator of the same type in
    value                      read-only result

The update template is an exponential-moving step toward the new data:

    theta <- theta + gamma * (t(x) - theta)

where t(x) is the sufficient statistic of the observation (or its average
over the minibatch). State is O(1) in the number of observations.

Mean is the minimal instance used to validate the contract.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np

from onlinestats.errors import TypeMismatchError


@runtime_checkable
class OnlineStat(Protocol):
    """Structural type for estimators driven by a Series."""

    n: int

    def update(self, x: float, gamma: float) -> None:
        ...

    def update_batch(self, xs: np.ndarray, gamma: float) -> None:
        ...

    def merge(self, other: Any, ratio: float, n: Optional[int] = None) -> None:
        ...

    @property
    def value(self) -> Any:
        ...


def check_same_type(a: Any, b: Any) -> None:
    """
    Require two stats to be merge-compatible.

    Raises:
        TypeMismatchError: If a and b are not the same type
    """
    if type(a) is not type(b):
        raise TypeMismatchError(
            f"Cannot merge {type(b).__name__} into {type(a).__name__}"
        )


def as_batch(xs: Any) -> np.ndarray:
    """Flatten a minibatch to a 1D float array."""
    return np.asarray(xs, dtype=np.float64).ravel()


@dataclass
class Mean:
    """
    Running mean.

    Formula:
        update:  mu <- mu + gamma * (x - mu)
        batch:   mu <- mu + gamma * (mean(xs) - mu)
        merge:   mu <- mu + ratio * (other.mu - mu)

    Attributes:
        n: Number of observations seen
        mean: Current estimate
    """
    n: int = 0
    mean: float = 0.0

    def update(self, x: float, gamma: float) -> None:
        x = float(x)
        self.n += 1
        self.mean += gamma * (x - self.mean)

    def update_batch(self, xs: np.ndarray, gamma: float) -> None:
        xs = as_batch(xs)
        if xs.size == 0:
            return
        self.n += xs.size
        self.mean += gamma * (float(xs.mean()) - self.mean)

    def merge(self, other: 'Mean', ratio: float, n: Optional[int] = None) -> None:
        check_same_type(self, other)
        self.mean += ratio * (other.mean - self.mean)
        self.n += other.n if n is None else n

    @property
    def value(self) -> float:
        return self.mean
