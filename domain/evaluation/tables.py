"""Per-task evaluation tables."""

import numpy as np
import pandas as pd

TASK_TABLE_COLUMNS = ["Task", "Count", "RMSE", "MAE", "Mean target", "Mean prediction"]


def compute_task_metrics_table(
    df: pd.DataFrame,
    task_col: str,
    target_col: str,
    pred_col: str,
) -> pd.DataFrame:
    """
    Build a table of regression errors grouped by task.

    Columns in the result:
      - Task: task name
      - Count: number of held-out examples of this task
      - RMSE / MAE: errors of the predictions on this task
      - Mean target / Mean prediction: averages, to spot systematic offsets

    Args:
        df: DataFrame with targets and predictions
        task_col: Column name holding the task
        target_col: Column name holding the ground-truth target
        pred_col: Column name holding the prediction

    Returns:
        DataFrame sorted by task name
    """
    for col in [task_col, target_col, pred_col]:
        if col not in df.columns:
            raise KeyError(f"Required column '{col}' not found in DataFrame.")

    rows: list[dict[str, object]] = []
    for task, group in df.groupby(task_col, sort=True):
        err = group[pred_col].astype(float) - group[target_col].astype(float)
        rows.append(
            {
                "Task": str(task),
                "Count": len(group),
                "RMSE": round(float(np.sqrt(np.mean(err**2))), 6),
                "MAE": round(float(np.mean(np.abs(err))), 6),
                "Mean target": round(float(group[target_col].astype(float).mean()), 6),
                "Mean prediction": round(float(group[pred_col].astype(float).mean()), 6),
            }
        )

    if not rows:
        return pd.DataFrame(columns=TASK_TABLE_COLUMNS)
    return pd.DataFrame(rows, columns=TASK_TABLE_COLUMNS)
