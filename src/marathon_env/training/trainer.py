"""Linear regression and random forest trainers for ranking predictors."""

import json

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestRegressor
from sklearn.linear_model import LinearRegression
from sklearn.model_selection import train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from marathon_env.config.features import PREDICTOR_COLS
from marathon_env.config.settings import ModelConfig
from marathon_env.data.loader import load_analysis_table
from marathon_env.training.evaluation import cross_validated_r2, regression_metrics

MIN_TRAINING_ROWS = 5


def prepare_features(
    df: pd.DataFrame, feature_cols: tuple[str, ...], target: str
) -> tuple[pd.DataFrame, pd.Series]:
    """Select model features and target, dropping incomplete rows.

    Adds is_male (0/1) from the sex column when requested.

    Returns:
        Tuple of (feature matrix, target series).
    """
    df = df.copy()
    if "is_male" in feature_cols:
        df["is_male"] = (df["sex"].astype(str) == "Male").astype(int)

    model_df = df[[*feature_cols, target]]
    complete = model_df.notna().all(axis=1)
    dropped = int((~complete).sum())
    if dropped:
        print(f"Dropped {dropped} rows with missing features or target")

    model_df = model_df.loc[complete].reset_index(drop=True)
    return model_df[list(feature_cols)], model_df[target]


def _ranking_frame(features: list[str], importance: np.ndarray) -> pd.DataFrame:
    ranking = pd.DataFrame({"feature": features, "importance": importance})
    ranking["is_environmental"] = ranking["feature"].isin(PREDICTOR_COLS)
    ranking = ranking.sort_values("importance", ascending=False, kind="mergesort")
    ranking["rank"] = np.arange(1, len(ranking) + 1)
    return ranking.reset_index(drop=True)


class _RankingTrainer:
    """Shared fit/evaluate/save flow for the ranking models."""

    def __init__(self, config: ModelConfig) -> None:
        self.config = config
        self.model = None
        self.feature_cols: list[str] = list(config.feature_cols)
        self.metrics: dict | None = None

    def build_model(self):
        raise NotImplementedError

    def rank_features(self) -> pd.DataFrame:
        raise NotImplementedError

    def train(self, df: pd.DataFrame | None = None) -> pd.DataFrame:
        """Fit the model and rank its features.

        Metrics come from a hold-out split and k-fold CV on the training
        part; the ranking comes from a final fit on all complete rows.

        Args:
            df: Analysis table (loaded from config.input_file if None).

        Returns:
            Ranking DataFrame sorted by importance.
        """
        config = self.config
        if df is None:
            df = load_analysis_table(config.input_file)

        X, y = prepare_features(df, config.feature_cols, config.target)
        if len(X) < MIN_TRAINING_ROWS:
            raise ValueError(
                f"Not enough complete rows to train the model ({len(X)} < {MIN_TRAINING_ROWS})."
            )

        X_train, X_test, y_train, y_test = train_test_split(
            X, y, test_size=config.test_size, random_state=config.random_state
        )

        cv_mean, cv_std = cross_validated_r2(
            self.build_model(), X_train, y_train, config.cv_folds, config.random_state
        )

        holdout_model = self.build_model()
        holdout_model.fit(X_train, y_train)
        holdout = regression_metrics(y_test, holdout_model.predict(X_test))

        self.model = self.build_model()
        self.model.fit(X, y)
        ranking = self.rank_features()

        self.metrics = {
            "model_type": config.model_type,
            "target": config.target,
            "rows": len(X),
            "train_rows": len(X_train),
            "test_rows": len(X_test),
            "holdout_mae": holdout["mae"],
            "holdout_rmse": holdout["rmse"],
            "holdout_r2": holdout["r2"],
            "cv_r2_mean": cv_mean,
            "cv_r2_std": cv_std,
            "features": self.feature_cols,
        }

        print("Holdout evaluation:")
        print(f"MAE: {holdout['mae']:.4f}")
        print(f"RMSE: {holdout['rmse']:.4f}")
        print(f"R2: {holdout['r2']:.4f}")
        print(f"CV R2: {cv_mean:.4f} +/- {cv_std:.4f}")
        print("Feature ranking:")
        print(ranking.to_string(index=False))

        self.save(ranking)
        return ranking

    def save(self, ranking: pd.DataFrame) -> None:
        """Write the ranking CSV and metrics JSON."""
        config = self.config
        config.ranking_out.parent.mkdir(parents=True, exist_ok=True)
        ranking.to_csv(config.ranking_out, index=False)
        print(f"Saved feature ranking to: {config.ranking_out}")

        with config.metrics_out.open("w", encoding="utf-8") as handle:
            json.dump(self.metrics, handle, indent=2)
        print(f"Saved metrics to: {config.metrics_out}")


class LinearTrainer(_RankingTrainer):
    """Standardized linear regression; ranks by |coefficient|.

    Args:
        config: ModelConfig with model_type "linear".
    """

    def build_model(self) -> Pipeline:
        return Pipeline(
            [
                ("scaler", StandardScaler()),
                ("regressor", LinearRegression()),
            ]
        )

    def rank_features(self) -> pd.DataFrame:
        coefs = self.model.named_steps["regressor"].coef_
        ranking = _ranking_frame(self.feature_cols, np.abs(coefs))
        coef_map = dict(zip(self.feature_cols, coefs))
        ranking.insert(1, "coefficient", ranking["feature"].map(coef_map))
        return ranking


class ForestTrainer(_RankingTrainer):
    """Random forest regressor; ranks by impurity-based importance.

    Args:
        config: ModelConfig with model_type "forest".
    """

    def build_model(self) -> RandomForestRegressor:
        config = self.config
        return RandomForestRegressor(
            n_estimators=config.n_estimators,
            max_depth=config.max_depth,
            min_samples_leaf=config.min_samples_leaf,
            random_state=config.random_state,
            n_jobs=-1,
        )

    def rank_features(self) -> pd.DataFrame:
        return _ranking_frame(self.feature_cols, self.model.feature_importances_)


def train_model(
    model_type: str,
    input_file: str | None = None,
    output_dir: str | None = None,
    df: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """Train a ranking model.

    Args:
        model_type: Model type (linear or forest).
        input_file: Optional analysis table path overriding the default.
        output_dir: Optional directory for ranking and metrics files.
        df: Optional in-memory analysis table (skips loading input_file).

    Returns:
        Feature ranking DataFrame.
    """
    overrides = {}
    if input_file is not None:
        overrides["input_file"] = input_file
    if output_dir is not None:
        overrides["output_dir"] = output_dir

    if model_type == "linear":
        trainer = LinearTrainer(ModelConfig(model_type="linear", **overrides))
    elif model_type == "forest":
        trainer = ForestTrainer(ModelConfig(model_type="forest", **overrides))
    else:
        raise ValueError(f"Unknown model type: {model_type}")

    return trainer.train(df)
