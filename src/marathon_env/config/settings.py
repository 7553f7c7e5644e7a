"""Centralized configuration settings for the marathon/environment analysis."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from marathon_env.config.features import PREDICTOR_COLS, CONTROL_COLS, TARGET_COL

ModelType = Literal["linear", "forest"]


@dataclass
class PipelineConfig:
    """Configuration for building the analysis table."""

    performance_file: str = "data/project1.csv"
    air_quality_file: str = "data/aqi_values.csv"
    output_file: str | None = "data/analysis_table.csv"
    min_age: int = 14
    max_age: int | None = 85


@dataclass
class ModelConfig:
    """Configuration for fitting a predictor-ranking model."""

    model_type: ModelType
    input_file: str = "data/analysis_table.csv"
    output_dir: str = "reports/models"
    target: str = TARGET_COL
    feature_cols: tuple[str, ...] = PREDICTOR_COLS + CONTROL_COLS
    test_size: float = 0.2
    random_state: int = 42
    cv_folds: int = 5
    n_estimators: int = 300
    max_depth: int | None = None
    min_samples_leaf: int = 5

    @property
    def ranking_out(self) -> Path:
        return Path(self.output_dir) / f"{self.model_type}_ranking.csv"

    @property
    def metrics_out(self) -> Path:
        return Path(self.output_dir) / f"{self.model_type}_metrics.json"


@dataclass
class ReportConfig:
    """Configuration for descriptive outputs and the markdown report."""

    input_file: str = "data/analysis_table.csv"
    tables_dir: str = "reports/tables"
    figures_dir: str = "reports/figures"
    models_dir: str = "reports/models"
    output_file: str = "reports/analysis.md"


# All valid model types
MODEL_TYPES: tuple[ModelType, ...] = ("linear", "forest")
