"""
Default hyper-parameters and fixed vocabularies.

Values here are the single source of defaults for weights, merge modes,
stochastic-gradient algorithms and classification thresholds. Changing a
default here changes it everywhere it is used.
"""

from typing import Final, Dict, Tuple, Any

# =============================================================================
# Merge Modes
# =============================================================================

MERGE_APPEND: Final[str] = "append"
"""Second series' history happened after the first one's."""

MERGE_MEAN: Final[str] = "mean"
"""Weighted average by observation counts (same ratio as append)."""

MERGE_SINGLETON: Final[str] = "singleton"
"""Second series counts as exactly one extra observation."""

MERGE_MODES: Final[Tuple[str, ...]] = (MERGE_APPEND, MERGE_MEAN, MERGE_SINGLETON)

# =============================================================================
# Weights
# =============================================================================

DEFAULT_EXPONENTIAL_LAMBDA: Final[float] = 0.1
"""Default constant mixing coefficient for ExponentialWeight."""

DEFAULT_LEARNING_RATE_EXPONENT: Final[float] = 0.6
"""Default decay exponent r for LearningRate, gamma = 1 / t^r."""

# =============================================================================
# Stochastic Gradient Algorithms
# =============================================================================

DEFAULT_ETA: Final[float] = 1.0
"""Base step size for SGD-type algorithms."""

DEFAULT_DECAY_EXPONENT: Final[float] = 0.5
"""Step size decays as eta / t^r."""

DEFAULT_MOMENTUM: Final[float] = 0.9
"""Velocity retention for Momentum."""

DEFAULT_ADAGRAD_EPS: Final[float] = 1e-8
"""Keeps AdaGrad's denominator away from zero."""

# =============================================================================
# Models
# =============================================================================

DEFAULT_QUANTILE_TAU: Final[float] = 0.5
DEFAULT_QUANTILE_LEVELS: Final[Tuple[float, ...]] = (0.25, 0.5, 0.75)
"""Levels tracked by QuantileSGD and online_summary."""

DEFAULT_HUBER_DELTA: Final[float] = 1.0

LOGISTIC_THRESHOLD: Final[float] = 0.5
"""Predicted probability above which LogisticRegression classifies as 1."""

SVM_THRESHOLD: Final[float] = 0.0
"""Linear predictor above which SVMLike classifies as 1."""

DEFAULT_LOGREG_EXPONENT: Final[float] = 0.51
"""Learning-rate exponent carried by LogRegSGD."""


def get_default_config() -> Dict[str, Any]:
    """
    Get the default engine configuration.

    Returns:
        Dict with configuration defaults:
            - weight: Name of the default Weight ('EqualWeight')
            - merge_mode: Default merge mode ('append')
            - merge_modes: All named merge modes
            - algorithm: Name and hyper-parameters of the default Algorithm
            - momentum: Default Momentum retention
            - adagrad_eps: Default AdaGrad epsilon
            - quantile_tau, huber_delta: Default model parameters
            - quantile_levels: Levels tracked by QuantileSGD
            - logistic_threshold, svm_threshold: Classification cut-offs

    Example:
        >>> config = get_default_config()
        >>> print(f"Default merge: {config['merge_mode']}")
    """
    return {
        'weight': 'EqualWeight',
        'merge_mode': MERGE_APPEND,
        'merge_modes': list(MERGE_MODES),
        'algorithm': {
            'name': 'SGD',
            'eta': DEFAULT_ETA,
            'r': DEFAULT_DECAY_EXPONENT,
        },
        'momentum': DEFAULT_MOMENTUM,
        'adagrad_eps': DEFAULT_ADAGRAD_EPS,
        'quantile_tau': DEFAULT_QUANTILE_TAU,
        'quantile_levels': list(DEFAULT_QUANTILE_LEVELS),
        'huber_delta': DEFAULT_HUBER_DELTA,
        'logistic_threshold': LOGISTIC_THRESHOLD,
        'svm_threshold': SVM_THRESHOLD,
    }
