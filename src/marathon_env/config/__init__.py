"""Configuration modules for the marathon/environment analysis."""

from .features import (
    AGE_GROUP_LABELS,
    AGE_GROUPS,
    AIR_QUALITY_COLS,
    CONTROL_COLS,
    ENV_COLS,
    NUMERIC_COLS,
    OUTPUT_COLS,
    PERFORMANCE_ALIASES,
    PERFORMANCE_COLS,
    PREDICTOR_COLS,
    SEX_LABELS,
    SITE_LABELS,
    TARGET_COL,
    get_model_feature_columns,
)
from .settings import MODEL_TYPES, ModelConfig, PipelineConfig, ReportConfig

__all__ = [
    "AGE_GROUPS",
    "AGE_GROUP_LABELS",
    "AIR_QUALITY_COLS",
    "CONTROL_COLS",
    "ENV_COLS",
    "MODEL_TYPES",
    "ModelConfig",
    "NUMERIC_COLS",
    "OUTPUT_COLS",
    "PERFORMANCE_ALIASES",
    "PERFORMANCE_COLS",
    "PREDICTOR_COLS",
    "PipelineConfig",
    "ReportConfig",
    "SEX_LABELS",
    "SITE_LABELS",
    "TARGET_COL",
    "get_model_feature_columns",
]
