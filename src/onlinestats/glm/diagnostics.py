"""
Quality metrics for fitted online models.

Scores a StochasticModel or LogRegSGD on held-out data:
- Classification (LogisticRegression, SVMLike, LogRegSGD): accuracy, AUC
- Regression (everything else): MSE, MAE, R^2
"""

from typing import Any, Dict

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    roc_auc_score,
    mean_squared_error,
    mean_absolute_error,
    r2_score,
)

from onlinestats.glm.logreg_sgd import LogRegSGD
from onlinestats.glm.models import LogisticRegression, SVMLike
from onlinestats.glm.stochastic_model import StochasticModel


def is_classifier(model: Any) -> bool:
    """True for models with a classification rule."""
    if isinstance(model, LogRegSGD):
        return True
    return isinstance(model, StochasticModel) and isinstance(
        model.model, (LogisticRegression, SVMLike)
    )


def compute_model_metrics(model: Any, x: np.ndarray, y: np.ndarray) -> Dict[str, Any]:
    """
    Score a fitted model on (x, y).

    Args:
        model: StochasticModel or LogRegSGD
        x: (m, p) feature matrix
        y: (m,) responses, in the model's label convention
            (0/1 for LogisticRegression, -1/+1 for SVMLike, the caller's
            labels for LogRegSGD)

    Returns:
        dict with:
            - n_samples: number of rows scored
            - task: 'classification' or 'regression'
            - accuracy, auc: for classifiers (auc is 0.5 when only one class
              is present)
            - mse, mae, r2: for regressors

    Example:
        >>> metrics = compute_model_metrics(model, X_test, y_test)
        >>> print(f"AUC: {metrics['auc']:.3f}")
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y).ravel()
    n = len(y)
    if n == 0:
        return {'n_samples': 0, 'error': 'No samples'}

    if not is_classifier(model):
        y_pred = np.asarray(model.predict(x), dtype=np.float64)
        y_true = y.astype(np.float64)
        return {
            'n_samples': n,
            'task': 'regression',
            'mse': float(mean_squared_error(y_true, y_pred)),
            'mae': float(mean_absolute_error(y_true, y_pred)),
            'r2': float(r2_score(y_true, y_pred)) if n > 1 else float('nan'),
        }

    # Positive class indicator and a score that increases with it
    if isinstance(model, LogRegSGD):
        y_true = (y == model.classes[1]).astype(int)
        y_label = (np.asarray(model.classify(x)) == model.classes[1]).astype(int)
    else:
        # 0/1 labels for logistic, -1/+1 for SVM
        cut = 0.5 if isinstance(model.model, LogisticRegression) else 0.0
        y_true = (y.astype(np.float64) > cut).astype(int)
        y_label = np.asarray(model.classify(x)).astype(int)
    score = np.asarray(model.predict(x), dtype=np.float64)

    if 0 < y_true.sum() < n:
        auc = float(roc_auc_score(y_true, score))
    else:
        auc = 0.5  # No discrimination possible

    return {
        'n_samples': n,
        'task': 'classification',
        'accuracy': float(accuracy_score(y_true, y_label)),
        'auc': auc,
    }
