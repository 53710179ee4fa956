"""
Regularization penalties.

Each penalty gives its value, its (sub)gradient and its proximal
operator. Penalties apply to the coefficients only, never the intercept.

    | Penalty                  | value                                     |
    |--------------------------|-------------------------------------------|
    | NoPenalty                | 0                                         |
    | L2Penalty(lam)           | lam / 2 * ||b||^2                         |
    | L1Penalty(lam)           | lam * ||b||_1                             |
    | ElasticNetPenalty(l, a)  | l * (a * ||b||_1 + (1 - a) / 2 * ||b||^2) |
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from onlinestats.errors import ConfigurationError


def _soft_threshold(beta: np.ndarray, k: float) -> np.ndarray:
    return np.sign(beta) * np.maximum(np.abs(beta) - k, 0.0)


def _check_lam(lam: float) -> None:
    if lam < 0.0:
        raise ConfigurationError(f"lam must be >= 0, got {lam}")


class Penalty(ABC):
    """Regularization term on the coefficient vector."""

    @abstractmethod
    def value(self, beta: np.ndarray) -> float:
        ...

    @abstractmethod
    def gradient(self, beta: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def prox(self, beta: np.ndarray, step: float) -> np.ndarray:
        """argmin_u  penalty(u) + ||u - beta||^2 / (2 * step)"""


class NoPenalty(Penalty):
    """The zero penalty."""

    def value(self, beta):
        return 0.0

    def gradient(self, beta):
        return np.zeros_like(beta, dtype=np.float64)

    def prox(self, beta, step):
        return np.array(beta, dtype=np.float64)

    def __repr__(self) -> str:
        return "NoPenalty"


@dataclass(frozen=True)
class L2Penalty(Penalty):
    """Ridge penalty."""
    lam: float = 0.1

    def __post_init__(self) -> None:
        _check_lam(self.lam)

    def value(self, beta):
        return 0.5 * self.lam * float(np.dot(beta, beta))

    def gradient(self, beta):
        return self.lam * np.asarray(beta, dtype=np.float64)

    def prox(self, beta, step):
        return np.asarray(beta, dtype=np.float64) / (1.0 + step * self.lam)


@dataclass(frozen=True)
class L1Penalty(Penalty):
    """Lasso penalty. The prox step produces exact zeros."""
    lam: float = 0.1

    def __post_init__(self) -> None:
        _check_lam(self.lam)

    def value(self, beta):
        return self.lam * float(np.sum(np.abs(beta)))

    def gradient(self, beta):
        return self.lam * np.sign(beta)

    def prox(self, beta, step):
        return _soft_threshold(np.asarray(beta, dtype=np.float64), step * self.lam)


@dataclass(frozen=True)
class ElasticNetPenalty(Penalty):
    """
    Mix of L1 and L2.

    Attributes:
        lam: Overall strength, >= 0
        alpha: L1 share, 0 (pure ridge) to 1 (pure lasso)
    """
    lam: float = 0.1
    alpha: float = 0.5

    def __post_init__(self) -> None:
        _check_lam(self.lam)
        if not 0.0 <= self.alpha <= 1.0:
            raise ConfigurationError(f"alpha must be in [0, 1], got {self.alpha}")

    def value(self, beta):
        l1 = float(np.sum(np.abs(beta)))
        l2 = float(np.dot(beta, beta))
        return self.lam * (self.alpha * l1 + 0.5 * (1.0 - self.alpha) * l2)

    def gradient(self, beta):
        beta = np.asarray(beta, dtype=np.float64)
        return self.lam * (self.alpha * np.sign(beta) + (1.0 - self.alpha) * beta)

    def prox(self, beta, step):
        shrunk = _soft_threshold(np.asarray(beta, dtype=np.float64), step * self.lam * self.alpha)
        return shrunk / (1.0 + step * self.lam * (1.0 - self.alpha))
