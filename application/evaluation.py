"""Evaluation workflow and summary logging."""

import logging
from pathlib import Path

import pandas as pd
from opik import track

from application.constants import PRED_COL
from application.training import TrainingResult
from domain.evaluation.metrics import compute_binary_metrics, compute_regression_metrics
from domain.evaluation.tables import compute_task_metrics_table
from domain.machines import ProblemType
from infrastructure.config.models import RunConfig
from infrastructure.observability.logging import clear_stage_context, set_log_context

logger = logging.getLogger(__name__)


@track(
    name="Multitask.evaluation",
    type="general",
    metadata={"task": "multitask_kernel_evaluation"},
    capture_input=False,
    capture_output=False,
)
def run_evaluation(cfg: RunConfig, result: TrainingResult) -> tuple[dict, pd.DataFrame | None]:
    """
    Compute metrics on the held-out predictions.

    Regression machines get RMSE/MAE/R^2 (with CIs) and, when a task column is
    configured, a per-task table. The binary classifier gets accuracy.

    Args:
        cfg: RunConfig instance
        result: Output of run_training

    Returns:
        Tuple of (metrics dict, per-task table or None)

    Raises:
        ValueError: If no target column is configured
    """
    set_log_context(stage="eval")
    target_col = cfg.columns.target_col
    if target_col is None:
        raise ValueError("columns.target_col is required for evaluation")

    df = result.test_df_out
    task_table: pd.DataFrame | None = None

    if result.machine.problem_type is ProblemType.REGRESSION:
        metrics = compute_regression_metrics(df[target_col].to_numpy(), df[PRED_COL].to_numpy(), cfg.stats)
        if cfg.columns.task_col is not None:
            task_table = compute_task_metrics_table(
                df, task_col=cfg.columns.task_col, target_col=target_col, pred_col=PRED_COL
            )
        logger.info("RMSE: %.4f", metrics["rmse"])
    else:
        metrics = compute_binary_metrics(df[target_col].to_numpy(), df[PRED_COL].to_numpy(), cfg.stats)
        logger.info("Accuracy: %.4f", metrics["accuracy"])

    metrics["problem_type"] = result.machine.problem_type.value
    metrics["n_train"] = len(result.train_df)
    clear_stage_context()
    return metrics, task_table


def log_evaluation_summary(
    metrics: dict,
    task_table: pd.DataFrame | None,
    predictions_path: Path,
    metrics_path: Path,
    model_path: Path,
) -> None:
    """
    Log a concise, human-readable evaluation summary.

    Args:
        metrics: Dictionary of computed metrics
        task_table: Per-task table (optional)
        predictions_path: Path to predictions JSON file
        metrics_path: Path to metrics JSON file
        model_path: Path to the saved model artifact
    """
    logger.info("=== Evaluation Summary ===")
    logger.info("Held-out examples: %d (trained on %d)", metrics["n"], metrics["n_train"])

    if "rmse" in metrics:
        logger.info(
            "RMSE: %.4f (95%% CI [%.4f, %.4f])",
            metrics["rmse"],
            metrics["rmse_ci_95"][0],
            metrics["rmse_ci_95"][1],
        )
        logger.info("MAE: %.4f", metrics["mae"])
        logger.info(
            "R^2: %.4f (95%% CI [%.4f, %.4f])",
            metrics["r2"],
            metrics["r2_ci_95"][0],
            metrics["r2_ci_95"][1],
        )
    if "accuracy" in metrics:
        logger.info(
            "Accuracy: %.4f (95%% CI [%.4f, %.4f])",
            metrics["accuracy"],
            metrics["accuracy_ci_95"][0],
            metrics["accuracy_ci_95"][1],
        )
        logger.info("Per-class support: %s", metrics["support_per_class"])

    if task_table is not None and not task_table.empty:
        logger.info("--- Per-task errors ---")
        logger.info("\n%s", task_table.to_string(index=False))

    logger.info("--- Artifacts ---")
    logger.info("Predictions JSON: %s", predictions_path)
    logger.info("Metrics JSON: %s", metrics_path)
    logger.info("Model: %s", model_path)
