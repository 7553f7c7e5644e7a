"""Model training logic for ranking environmental predictors."""

from .evaluation import cross_validated_r2, regression_metrics
from .trainer import ForestTrainer, LinearTrainer, prepare_features, train_model

__all__ = [
    "ForestTrainer",
    "LinearTrainer",
    "cross_validated_r2",
    "prepare_features",
    "regression_metrics",
    "train_model",
]
