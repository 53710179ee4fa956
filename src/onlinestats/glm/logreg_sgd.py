"""
Minibatch logistic regression.

Fits a binary logistic model one batch at a time. The response may use
any two labels; they are sorted and mapped to -1 (first) and +1 (second).
Each batch moves the coefficients along the averaged log-likelihood
gradient:

    beta <- beta + rate * mean_i( y_i / (1 + exp(y_i * x_i . beta)) * x_i )
    rate  = 1 / nb^r

where nb counts batches, so the first batch takes a full step.
"""

from typing import Any, Optional, Union

import numpy as np
from scipy.special import expit

from onlinestats.constants import DEFAULT_LOGREG_EXPONENT
from onlinestats.errors import ConfigurationError


class LogRegSGD:
    """
    Logistic regression updated by minibatch gradient ascent.

    Args:
        x: (m, p) first batch of features
        y: (m,) first batch of responses with exactly two distinct labels
        r: Learning-rate decay exponent, 0 < r <= 1
        intercept: Prepend a constant column
        beta: Optional starting coefficients (length p + intercept)

    Attributes:
        beta: Coefficients, intercept first when fitted
        classes: The two response labels, sorted
        n: Rows seen
        nb: Batches seen

    Raises:
        ConfigurationError: If y does not have exactly two categories, or r
            is out of range
    """

    def __init__(
        self,
        x: Any,
        y: Any,
        r: float = DEFAULT_LOGREG_EXPONENT,
        intercept: bool = True,
        beta: Optional[np.ndarray] = None,
    ) -> None:
        if not 0.0 < r <= 1.0:
            raise ConfigurationError(f"r must be in (0, 1], got {r}")
        y = np.asarray(y).ravel()
        classes = np.unique(y)
        if len(classes) != 2:
            raise ConfigurationError(
                f"response vector does not have two categories (found {len(classes)})"
            )
        self.classes = classes
        self.intercept = bool(intercept)
        self.r = float(r)

        x = self._design(x)
        if beta is None:
            self.beta = np.zeros(x.shape[1])
        else:
            self.beta = np.array(beta, dtype=np.float64)
            if self.beta.shape != (x.shape[1],):
                raise ConfigurationError(
                    f"beta must have length {x.shape[1]}, got {self.beta.shape}"
                )
        self.n = 0
        self.nb = 0
        self._ascend(x, self._signed(y))

    def _design(self, x: Any) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 2:
            raise ValueError(f"Expected a 2D feature matrix, got shape {x.shape}")
        if self.intercept:
            x = np.column_stack((np.ones(x.shape[0]), x))
        return x

    def _signed(self, y: Any) -> np.ndarray:
        y = np.asarray(y).ravel()
        unknown = ~np.isin(y, self.classes)
        if unknown.any():
            raise ConfigurationError(
                f"response has labels outside {self.classes.tolist()}: "
                f"{np.unique(y[unknown]).tolist()}"
            )
        return np.where(y == self.classes[1], 1.0, -1.0)

    def _ascend(self, x: np.ndarray, y: np.ndarray) -> None:
        if len(y) != x.shape[0]:
            raise ValueError(f"Got {x.shape[0]} rows but {len(y)} responses")
        self.nb += 1
        rate = 1.0 / self.nb ** self.r
        weights = y * expit(-y * (x @ self.beta))
        self.beta += rate * (weights[:, None] * x).mean(axis=0)
        self.n += len(y)

    def update(self, x: Any, y: Any) -> None:
        """Take one gradient step on a batch."""
        self._ascend(self._design(x), self._signed(y))

    def predict(self, x: Any) -> Union[float, np.ndarray]:
        """Probability of the second (larger) class."""
        x = np.asarray(x, dtype=np.float64)
        single = x.ndim == 1
        p = expit(self._design(np.atleast_2d(x)) @ self.beta)
        return float(p[0]) if single else p

    def classify(self, x: Any) -> Any:
        """Most likely label, in the caller's label vocabulary."""
        p = np.asarray(self.predict(x))
        labels = np.where(p > 0.5, self.classes[1], self.classes[0])
        return labels.item() if labels.ndim == 0 else labels

    def coef(self) -> np.ndarray:
        return self.beta.copy()

    def state(self) -> dict:
        """Named snapshot: coefficients, rows and batches."""
        offset = 0 if self.intercept else 1
        names = [f"beta{i + offset}" for i in range(len(self.beta))]
        return {**dict(zip(names, self.beta.tolist())), 'n': self.n, 'nb': self.nb}

    def __repr__(self) -> str:
        return f"LogRegSGD(n={self.n}, nb={self.nb}, beta={self.beta})"
