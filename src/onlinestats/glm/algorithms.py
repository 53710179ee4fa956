"""
Stochastic gradient algorithms.

An Algorithm turns a gradient into a coefficient step and owns its own
step-size schedule. The schedule counts calls to step() and is
independent of any Series Weight.

    | Algorithm  | Step                                               |
    |------------|----------------------------------------------------|
    | SGD        | -eta / t^r * g                                     |
    | Momentum   | v <- alpha * v + eta / t^r * g;  step = -v         |
    | AdaGrad    | G <- G + g^2;  step = -eta * g / sqrt(G + eps)     |
    | ProxSGD    | SGD on the loss only, then the penalty's prox      |

The gradient and coefficient vectors passed to step() include the
intercept as element 0 when the model fits one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from onlinestats.constants import (
    DEFAULT_ETA,
    DEFAULT_DECAY_EXPONENT,
    DEFAULT_MOMENTUM,
    DEFAULT_ADAGRAD_EPS,
)
from onlinestats.errors import ConfigurationError


def _check_eta_r(eta: float, r: float) -> None:
    if not eta > 0.0:
        raise ConfigurationError(f"eta must be > 0, got {eta}")
    if not 0.0 < r <= 1.0:
        raise ConfigurationError(f"r must be in (0, 1], got {r}")


@dataclass
class Algorithm(ABC):
    """
    Base algorithm.

    Attributes:
        t: Number of steps taken
        rate: Step size used by the last step
    """
    t: int = field(default=0, init=False)
    rate: float = field(default=0.0, init=False)

    # Proximal algorithms leave the penalty out of the gradient and apply
    # penalty.prox(beta, rate) after the step instead.
    proximal = False

    @abstractmethod
    def step(self, gradient: np.ndarray, beta: np.ndarray) -> np.ndarray:
        """
        Coefficient change for one update.

        Args:
            gradient: Gradient of the (penalized) loss w.r.t. beta
            beta: Current coefficients

        Returns:
            Delta to add to beta
        """

    def reset(self) -> None:
        self.t = 0
        self.rate = 0.0


@dataclass
class SGD(Algorithm):
    """Plain stochastic gradient descent with step eta / t^r."""
    eta: float = DEFAULT_ETA
    r: float = DEFAULT_DECAY_EXPONENT

    def __post_init__(self) -> None:
        _check_eta_r(self.eta, self.r)

    def _next_rate(self) -> float:
        self.t += 1
        self.rate = self.eta / self.t ** self.r
        return self.rate

    def step(self, gradient, beta):
        return -self._next_rate() * np.asarray(gradient, dtype=np.float64)


@dataclass
class Momentum(SGD):
    """SGD with heavy-ball momentum."""
    alpha: float = DEFAULT_MOMENTUM
    velocity: Optional[np.ndarray] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        if not 0.0 <= self.alpha < 1.0:
            raise ConfigurationError(f"alpha must be in [0, 1), got {self.alpha}")

    def step(self, gradient, beta):
        g = np.asarray(gradient, dtype=np.float64)
        if self.velocity is None or self.velocity.shape != g.shape:
            self.velocity = np.zeros_like(g)
        self.velocity = self.alpha * self.velocity + self._next_rate() * g
        return -self.velocity

    def reset(self) -> None:
        super().reset()
        self.velocity = None


@dataclass
class AdaGrad(Algorithm):
    """Per-coordinate step sizes scaled by accumulated squared gradients."""
    eta: float = DEFAULT_ETA
    eps: float = DEFAULT_ADAGRAD_EPS
    sum_sq: Optional[np.ndarray] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.eta > 0.0:
            raise ConfigurationError(f"eta must be > 0, got {self.eta}")
        if not self.eps > 0.0:
            raise ConfigurationError(f"eps must be > 0, got {self.eps}")

    def step(self, gradient, beta):
        g = np.asarray(gradient, dtype=np.float64)
        if self.sum_sq is None or self.sum_sq.shape != g.shape:
            self.sum_sq = np.zeros_like(g)
        self.t += 1
        self.rate = self.eta
        self.sum_sq += g * g
        return -self.eta * g / np.sqrt(self.sum_sq + self.eps)

    def reset(self) -> None:
        super().reset()
        self.sum_sq = None


@dataclass
class ProxSGD(SGD):
    """Proximal SGD: gradient step on the loss, then the penalty's prox."""

    proximal = True
