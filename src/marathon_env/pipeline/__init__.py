"""Data pipeline modules."""

from .join_data import build_analysis_table, run_pipeline

__all__ = [
    "build_analysis_table",
    "run_pipeline",
]
