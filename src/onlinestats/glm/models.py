"""
Model definitions for stochastic linear models.

A ModelDefinition supplies the link function and the loss gradient with
respect to the linear predictor. Everything else about fitting lives in
the Penalty and Algorithm strategies.

Gradients (d loss / d eta, where yhat = link(eta)):

    | Model                 | Link     | Gradient                           |
    |-----------------------|----------|------------------------------------|
    | L1Regression          | identity | sign(yhat - y)                     |
    | L2Regression          | identity | yhat - y                           |
    | LogisticRegression    | sigmoid  | yhat - y                 (y in {0, 1})
    | PoissonRegression     | exp      | yhat - y                           |
    | QuantileRegression(t) | identity | 1{y < yhat} - t                    |
    | SVMLike               | identity | -y if y * yhat < 1 else 0 (y in {-1, 1})
    | HuberRegression(d)    | identity | yhat - y if |y - yhat| <= d        |
    |                       |          | else d * sign(yhat - y)            |

All gradients accept scalars or numpy arrays.
"""

import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Union

import numpy as np
from scipy.special import expit

from onlinestats.constants import (
    DEFAULT_QUANTILE_TAU,
    DEFAULT_HUBER_DELTA,
    LOGISTIC_THRESHOLD,
    SVM_THRESHOLD,
)
from onlinestats.errors import ConfigurationError

ArrayOrFloat = Union[float, np.ndarray]


def _out(v: Any) -> ArrayOrFloat:
    """Return a Python float for scalar results, the array otherwise."""
    return float(v) if np.ndim(v) == 0 else v


class ModelDefinition(ABC):
    """Loss gradient, link and prediction for one regression family."""

    @abstractmethod
    def link(self, eta: ArrayOrFloat) -> ArrayOrFloat:
        ...

    @abstractmethod
    def gradient(self, y: ArrayOrFloat, yhat: ArrayOrFloat) -> ArrayOrFloat:
        ...

    def predict(self, x: np.ndarray, beta: np.ndarray, beta0: float) -> ArrayOrFloat:
        """
        Prediction for one row (vector x) or many (matrix X).

        Args:
            x: (p,) feature vector or (m, p) feature matrix
            beta: (p,) coefficients
            beta0: Intercept

        Returns:
            Scalar for a vector x, (m,) array for a matrix X
        """
        x = np.asarray(x, dtype=np.float64)
        return _out(self.link(x @ beta + beta0))

    def classify(self, x: np.ndarray, beta: np.ndarray, beta0: float) -> ArrayOrFloat:
        raise NotImplementedError(
            f"{type(self).__name__} does not define a classification rule"
        )

    def __repr__(self) -> str:
        return type(self).__name__


class IdentityLinkModel(ModelDefinition):
    """Models whose prediction is the raw linear predictor."""

    def link(self, eta: ArrayOrFloat) -> ArrayOrFloat:
        return eta


class L1Regression(IdentityLinkModel):
    """Least absolute deviation regression."""

    def gradient(self, y, yhat):
        return _out(np.sign(np.subtract(yhat, y)))


class L2Regression(IdentityLinkModel):
    """Least squares regression."""

    def gradient(self, y, yhat):
        return _out(np.subtract(yhat, y))


class LogisticRegression(ModelDefinition):
    """Logistic regression for 0/1 responses."""

    def link(self, eta):
        return expit(eta)

    def gradient(self, y, yhat):
        return _out(np.subtract(yhat, y))

    def classify(self, x, beta, beta0):
        p = np.asarray(self.predict(x, beta, beta0))
        return _out((p > LOGISTIC_THRESHOLD).astype(np.float64))


class PoissonRegression(ModelDefinition):
    """Poisson regression with log link for count responses."""

    def link(self, eta):
        with np.errstate(over='ignore'):
            mu = np.exp(eta)
        if not np.all(np.isfinite(mu)):
            warnings.warn("Poisson prediction overflowed; coefficients may be diverging")
        return mu

    def gradient(self, y, yhat):
        return _out(np.subtract(yhat, y))


@dataclass(frozen=True, repr=False)
class QuantileRegression(IdentityLinkModel):
    """
    Quantile regression via the check (pinball) loss.

    Attributes:
        tau: Target quantile, 0 < tau < 1
    """
    tau: float = DEFAULT_QUANTILE_TAU

    def __post_init__(self) -> None:
        if not 0.0 < self.tau < 1.0:
            raise ConfigurationError(f"tau must be in (0, 1), got {self.tau}")

    def gradient(self, y, yhat):
        below = np.less(y, yhat).astype(np.float64)
        return _out(below - self.tau)

    def __repr__(self) -> str:
        return f"QuantileRegression(tau={self.tau})"


class SVMLike(IdentityLinkModel):
    """Linear classifier with hinge loss for -1/+1 responses."""

    def gradient(self, y, yhat):
        y = np.asarray(y, dtype=np.float64)
        return _out(np.where(y * np.asarray(yhat) < 1.0, -y, 0.0))

    def classify(self, x, beta, beta0):
        eta = np.asarray(self.predict(x, beta, beta0))
        return _out((eta > SVM_THRESHOLD).astype(np.float64))


@dataclass(frozen=True, repr=False)
class HuberRegression(IdentityLinkModel):
    """
    Huber loss: quadratic near zero, linear in the tails.

    Attributes:
        delta: Residual size where the loss turns linear, delta > 0
    """
    delta: float = DEFAULT_HUBER_DELTA

    def __post_init__(self) -> None:
        if not self.delta > 0.0:
            raise ConfigurationError(f"delta must be > 0, got {self.delta}")

    def gradient(self, y, yhat):
        resid = np.subtract(yhat, y)
        clipped = self.delta * np.sign(resid)
        return _out(np.where(np.abs(resid) <= self.delta, resid, clipped))

    def __repr__(self) -> str:
        return f"HuberRegression(delta={self.delta})"
