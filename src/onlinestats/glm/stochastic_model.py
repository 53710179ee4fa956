"""
Stochastic (online) linear and generalized-linear models.

A StochasticModel composes three strategies around a coefficient vector:

    ModelDefinition  prediction and loss gradient (L2, logistic, ...)
    Penalty          regularization gradient or prox step
    Algorithm        gradient -> coefficient step, with its own schedule

Update for one row (x, y):

    n     += 1
    yhat   = model.predict(x, beta, beta0)
    g      = model.gradient(y, yhat)
    grad   = [g, g * x + penalty.gradient(beta)]     (intercept first)
    delta  = algorithm.step(grad, [beta0, beta])
    beta0 += delta[0];  beta += delta[1:]

A matrix X with a response vector y is one minibatch step on the
row-averaged gradient. The step size comes only from the Algorithm; the
model does not consult any Series Weight.

Usage:
    >>> o = StochasticModel(3, model=LogisticRegression(), algorithm=AdaGrad())
    >>> for xi, yi in zip(X, y):
    ...     o.update(xi, yi)
    >>> o.coef()
"""

from typing import Any, Optional, Union

import numpy as np
from loguru import logger

from onlinestats.glm.algorithms import Algorithm, SGD
from onlinestats.glm.models import ModelDefinition, L2Regression
from onlinestats.glm.penalties import Penalty, NoPenalty
from onlinestats.errors import ConfigurationError


class StochasticModel:
    """
    Online GLM fit by stochastic gradient steps.

    Args:
        p: Number of features; coefficients start at zero
        intercept: Fit an intercept beta0
        model: ModelDefinition (default L2Regression)
        penalty: Penalty (default NoPenalty)
        algorithm: Algorithm (default SGD). It holds mutable schedule state,
            so give each model its own instance.

    Attributes:
        beta0: Intercept (stays 0 when intercept is False)
        beta: (p,) coefficients, never resized
        n: Observations seen

    Raises:
        ConfigurationError: If p < 1
    """

    def __init__(
        self,
        p: int,
        intercept: bool = True,
        model: Optional[ModelDefinition] = None,
        penalty: Optional[Penalty] = None,
        algorithm: Optional[Algorithm] = None,
    ) -> None:
        if int(p) != p or p < 1:
            raise ConfigurationError(f"Number of features must be a positive integer, got {p}")
        self.beta0 = 0.0
        self.beta = np.zeros(int(p))
        self.intercept = bool(intercept)
        self.model = model if model is not None else L2Regression()
        self.penalty = penalty if penalty is not None else NoPenalty()
        self.algorithm = algorithm if algorithm is not None else SGD()
        self.n = 0
        logger.debug(
            "StochasticModel created: p={}, model={}, penalty={}, algorithm={}",
            p, self.model, self.penalty, type(self.algorithm).__name__,
        )

    @classmethod
    def from_batch(cls, x: Any, y: Any, **kwargs: Any) -> 'StochasticModel':
        """
        Build from an initial batch and immediately take one update on it.

        Coefficients start at zero, so initialization and the first
        gradient step are the same operation.

        Args:
            x: (m, p) feature matrix
            y: (m,) responses
            **kwargs: Passed to the constructor

        Returns:
            Fitted StochasticModel
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 2:
            raise ValueError(f"Expected a 2D feature matrix, got shape {x.shape}")
        o = cls(x.shape[1], **kwargs)
        o.update(x, y)
        return o

    @property
    def p(self) -> int:
        return len(self.beta)

    @property
    def nobs(self) -> int:
        return self.n

    # ------------------------------------------------------------------
    # Fitting
    # ------------------------------------------------------------------

    def update(self, x: Any, y: Any) -> None:
        """
        Update with one row or one minibatch.

        Args:
            x: (p,) feature vector or (m, p) feature matrix
            y: Scalar response, or (m,) responses for a matrix

        Raises:
            ValueError: If shapes do not match the model
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim == 1:
            self._check_width(x.shape[0])
            yhat = self.model.predict(x, self.beta, self.beta0)
            g = self.model.gradient(float(y), yhat)
            grad_b0 = g
            grad_beta = g * x
            self.n += 1
        elif x.ndim == 2:
            self._check_width(x.shape[1])
            y = np.asarray(y, dtype=np.float64).ravel()
            if len(y) != x.shape[0]:
                raise ValueError(
                    f"Got {x.shape[0]} rows but {len(y)} responses"
                )
            if len(y) == 0:
                return
            yhat = self.model.predict(x, self.beta, self.beta0)
            g = np.asarray(self.model.gradient(y, yhat), dtype=np.float64)
            grad_b0 = float(g.mean())
            grad_beta = x.T @ g / len(y)
            self.n += len(y)
        else:
            raise ValueError(f"Expected a 1D or 2D feature array, got shape {x.shape}")

        self._step(grad_b0, grad_beta)

    def _step(self, grad_b0: float, grad_beta: np.ndarray) -> None:
        if not self.algorithm.proximal:
            grad_beta = grad_beta + self.penalty.gradient(self.beta)

        if self.intercept:
            grad = np.concatenate(([grad_b0], grad_beta))
            delta = self.algorithm.step(grad, np.concatenate(([self.beta0], self.beta)))
            self.beta0 += float(delta[0])
            self.beta += delta[1:]
        else:
            self.beta += self.algorithm.step(grad_beta, self.beta)

        if self.algorithm.proximal:
            self.beta = self.penalty.prox(self.beta, self.algorithm.rate)

    def _check_width(self, width: int) -> None:
        if width != self.p:
            raise ValueError(f"Expected {self.p} features, got {width}")

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def predict(self, x: Any) -> Union[float, np.ndarray]:
        """Prediction for a feature vector (scalar) or matrix (vector)."""
        return self.model.predict(x, self.beta, self.beta0)

    def classify(self, x: Any) -> Union[float, np.ndarray]:
        """
        Hard labels for LogisticRegression (0/1) and SVMLike (0/1).

        Raises:
            NotImplementedError: For models without a classification rule
        """
        return self.model.classify(x, self.beta, self.beta0)

    def coef(self) -> np.ndarray:
        """[beta0, beta...] when fitting an intercept, otherwise a copy of beta."""
        if self.intercept:
            return np.concatenate(([self.beta0], self.beta))
        return self.beta.copy()

    def sparsity(self) -> float:
        """Fraction of non-zero coefficients (intercept excluded)."""
        return float(np.mean(self.beta != 0.0))

    def __repr__(self) -> str:
        return (
            f"StochasticModel(nobs={self.n}, intercept={self.intercept}, "
            f"model={self.model}, penalty={self.penalty}, "
            f"algorithm={self.algorithm})"
        )
