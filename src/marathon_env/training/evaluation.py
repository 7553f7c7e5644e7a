"""Evaluation metrics for the predictor-ranking models."""

import numpy as np
import pandas as pd
from sklearn.base import RegressorMixin, clone
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from sklearn.model_selection import KFold, cross_val_score


def regression_metrics(y_true, y_pred) -> dict[str, float]:
    """Compute MAE, RMSE and R² for a set of predictions.

    Args:
        y_true: Observed target values.
        y_pred: Model predictions.

    Returns:
        Dictionary with mae, rmse and r2 (NaN when there are no rows).
    """
    if len(y_true) == 0:
        return {"mae": float("nan"), "rmse": float("nan"), "r2": float("nan")}

    mae = mean_absolute_error(y_true, y_pred)
    rmse = np.sqrt(mean_squared_error(y_true, y_pred))
    r2 = r2_score(y_true, y_pred) if len(y_true) > 1 else float("nan")
    return {"mae": float(mae), "rmse": float(rmse), "r2": float(r2)}


def cross_validated_r2(
    model: RegressorMixin,
    X: pd.DataFrame,
    y: pd.Series,
    folds: int,
    random_state: int,
) -> tuple[float, float]:
    """Score a fresh copy of model with shuffled k-fold cross-validation.

    Args:
        model: Unfitted estimator.
        X: Feature matrix.
        y: Target values.
        folds: Requested number of folds (capped at the row count).
        random_state: Seed for the fold shuffle.

    Returns:
        Tuple of (mean R², std R²), NaN when fewer than two folds fit.
    """
    n_splits = min(folds, len(X))
    if n_splits < 2:
        return float("nan"), float("nan")

    cv = KFold(n_splits=n_splits, shuffle=True, random_state=random_state)
    scores = cross_val_score(clone(model), X, y, cv=cv, scoring="r2")
    return float(np.mean(scores)), float(np.std(scores))
