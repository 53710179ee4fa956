"""
Constants for online estimators.

Re-exports defaults and fixed vocabularies from the defaults module.
"""

from onlinestats.constants.defaults import (
    # Merge modes
    MERGE_APPEND,
    MERGE_MEAN,
    MERGE_SINGLETON,
    MERGE_MODES,
    # Weights
    DEFAULT_EXPONENTIAL_LAMBDA,
    DEFAULT_LEARNING_RATE_EXPONENT,
    # Algorithms
    DEFAULT_ETA,
    DEFAULT_DECAY_EXPONENT,
    DEFAULT_MOMENTUM,
    DEFAULT_ADAGRAD_EPS,
    # Models
    DEFAULT_QUANTILE_TAU,
    DEFAULT_QUANTILE_LEVELS,
    DEFAULT_HUBER_DELTA,
    LOGISTIC_THRESHOLD,
    SVM_THRESHOLD,
    DEFAULT_LOGREG_EXPONENT,
    # Config
    get_default_config,
)

__all__ = [
    "MERGE_APPEND",
    "MERGE_MEAN",
    "MERGE_SINGLETON",
    "MERGE_MODES",
    "DEFAULT_EXPONENTIAL_LAMBDA",
    "DEFAULT_LEARNING_RATE_EXPONENT",
    "DEFAULT_ETA",
    "DEFAULT_DECAY_EXPONENT",
    "DEFAULT_MOMENTUM",
    "DEFAULT_ADAGRAD_EPS",
    "DEFAULT_QUANTILE_TAU",
    "DEFAULT_QUANTILE_LEVELS",
    "DEFAULT_HUBER_DELTA",
    "LOGISTIC_THRESHOLD",
    "SVM_THRESHOLD",
    "DEFAULT_LOGREG_EXPONENT",
    "get_default_config",
]
