"""
Evaluation metrics and statistical analysis.

Provides:
- Regression metrics (RMSE, MAE, R^2) and binary accuracy
- Bootstrap confidence intervals
- Per-task error tables

All functions are pure (depend only on numpy, pandas, sklearn).
"""

from domain.evaluation.bootstrap import bootstrap_ci
from domain.evaluation.metrics import compute_binary_metrics, compute_regression_metrics
from domain.evaluation.tables import TASK_TABLE_COLUMNS, compute_task_metrics_table

__all__ = [
    "compute_regression_metrics",
    "compute_binary_metrics",
    "bootstrap_ci",
    "compute_task_metrics_table",
    "TASK_TABLE_COLUMNS",
]
