"""
Stochastic-gradient linear models.

A StochasticModel composes one ModelDefinition, one Penalty and one
Algorithm around a coefficient vector and learns from one row (or one
minibatch) at a time.

Modules:
    - models: Loss gradient and link per regression family
    - penalties: Regularization (ridge, lasso, elastic net)
    - algorithms: SGD, Momentum, AdaGrad, ProxSGD
    - stochastic_model: The composed online model
    - logreg_sgd: Minibatch logistic regression with arbitrary labels
    - diagnostics: Accuracy/AUC or MSE/MAE/R^2 on held-out data

Usage:
    >>> from onlinestats.glm import StochasticModel, HuberRegression, L1Penalty, ProxSGD
    >>>
    >>> o = StochasticModel(5, model=HuberRegression(2.0),
    ...                     penalty=L1Penalty(0.01), algorithm=ProxSGD())
    >>> o.update(X, y)
    >>> print(o.coef(), o.sparsity())
"""

from onlinestats.glm.models import (
    ModelDefinition,
    IdentityLinkModel,
    L1Regression,
    L2Regression,
    LogisticRegression,
    PoissonRegression,
    QuantileRegression,
    SVMLike,
    HuberRegression,
)

from onlinestats.glm.penalties import (
    Penalty,
    NoPenalty,
    L2Penalty,
    L1Penalty,
    ElasticNetPenalty,
)

from onlinestats.glm.algorithms import (
    Algorithm,
    SGD,
    Momentum,
    AdaGrad,
    ProxSGD,
)

from onlinestats.glm.stochastic_model import StochasticModel
from onlinestats.glm.logreg_sgd import LogRegSGD
from onlinestats.glm.diagnostics import compute_model_metrics, is_classifier

__all__ = [
    # Models
    "ModelDefinition",
    "IdentityLinkModel",
    "L1Regression",
    "L2Regression",
    "LogisticRegression",
    "PoissonRegression",
    "QuantileRegression",
    "SVMLike",
    "HuberRegression",
    # Penalties
    "Penalty",
    "NoPenalty",
    "L2Penalty",
    "L1Penalty",
    "ElasticNetPenalty",
    # Algorithms
    "Algorithm",
    "SGD",
    "Momentum",
    "AdaGrad",
    "ProxSGD",
    # Models over the triad
    "StochasticModel",
    "LogRegSGD",
    # Diagnostics
    "compute_model_metrics",
    "is_classifier",
]
