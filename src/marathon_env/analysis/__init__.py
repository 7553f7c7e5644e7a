"""Descriptive tables and figures."""

from .plots import save_all_plots
from .summary import (
    correlation_table,
    environment_by_site,
    summarize_by,
    write_summary_tables,
)

__all__ = [
    "correlation_table",
    "environment_by_site",
    "save_all_plots",
    "summarize_by",
    "write_summary_tables",
]
