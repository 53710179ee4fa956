"""
onlinestats - Online (single-pass) statistics and stochastic models.

Estimators consume data incrementally in O(1) memory per update and can
be merged after independent accumulation.

Modules:
    core: Weight schedules, the OnlineStat capability, Series and merge
    stats: Simple statistics (mean, variance, extrema, moments, quantiles)
    glm: Stochastic-gradient linear models (StochasticModel, LogRegSGD)
    constants: Defaults and merge-mode names
    errors: ConfigurationError, RangeError, TypeMismatchError

Quick Start:
    >>> from onlinestats import Series, Mean, Variance, Extrema, fit, merge
    >>>
    >>> a = fit(Series(Mean(), Variance(), Extrema()), x1)
    >>> b = fit(Series(Mean(), Variance(), Extrema()), x2)
    >>> merge(a, b, "append")
    >>> mean, var, (lo, hi) = a.value()
    >>>
    >>> from onlinestats import StochasticModel, LogisticRegression, AdaGrad
    >>> o = StochasticModel(10, model=LogisticRegression(), algorithm=AdaGrad())
    >>> o.update(X, y)
    >>> labels = o.classify(X_new)

Logging:
    Silent by default. onlinestats.enable_logging("DEBUG") shows Series,
    merge and model events through loguru.
"""

__version__ = "0.3.0"

from onlinestats.log import enable_logging, disable_logging

from onlinestats.errors import (
    OnlineStatsError,
    ConfigurationError,
    RangeError,
    TypeMismatchError,
)

from onlinestats.core import (
    # Weights
    Weight,
    EqualWeight,
    ExponentialWeight,
    BoundedEqualWeight,
    LearningRate,
    # Stat capability
    OnlineStat,
    Mean,
    # Series
    Series,
    fit,
    value,
    merge,
)

from onlinestats.stats import (
    Variance,
    Extrema,
    Moments,
    QuantileSGD,
    online_summary,
)

from onlinestats.glm import (
    # Models
    L1Regression,
    L2Regression,
    LogisticRegression,
    PoissonRegression,
    QuantileRegression,
    SVMLike,
    HuberRegression,
    # Penalties
    NoPenalty,
    L2Penalty,
    L1Penalty,
    ElasticNetPenalty,
    # Algorithms
    SGD,
    Momentum,
    AdaGrad,
    ProxSGD,
    # Models over the triad
    StochasticModel,
    LogRegSGD,
    compute_model_metrics,
)

__all__ = [
    # Version
    "__version__",
    # Logging
    "enable_logging",
    "disable_logging",
    # Errors
    "OnlineStatsError",
    "ConfigurationError",
    "RangeError",
    "TypeMismatchError",
    # Weights
    "Weight",
    "EqualWeight",
    "ExponentialWeight",
    "BoundedEqualWeight",
    "LearningRate",
    # Stats
    "OnlineStat",
    "Mean",
    "Variance",
    "Extrema",
    "Moments",
    "QuantileSGD",
    "online_summary",
    # Series
    "Series",
    "fit",
    "value",
    "merge",
    # GLM
    "L1Regression",
    "L2Regression",
    "LogisticRegression",
    "PoissonRegression",
    "QuantileRegression",
    "SVMLike",
    "HuberRegression",
    "NoPenalty",
    "L2Penalty",
    "L1Penalty",
    "ElasticNetPenalty",
    "SGD",
    "Momentum",
    "AdaGrad",
    "ProxSGD",
    "StochasticModel",
    "LogRegSGD",
    "compute_model_metrics",
]
