"""Regression and binary classification metrics with confidence intervals."""

import warnings

import numpy as np
from sklearn.exceptions import UndefinedMetricWarning
from sklearn.metrics import accuracy_score, mean_absolute_error, mean_squared_error, r2_score

from domain.evaluation.bootstrap import bootstrap_ci
from infrastructure.config.models import StatsConfig


def rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def _r2(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    if len(y_true) < 2:
        return float("nan")
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=UndefinedMetricWarning)
        return float(r2_score(y_true, y_pred))


def compute_regression_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    stats_cfg: StatsConfig,
) -> dict:
    """
    Compute RMSE, MAE and R^2, with bootstrap CIs for RMSE and R^2.

    Args:
        y_true: Ground-truth targets
        y_pred: Predicted targets
        stats_cfg: Statistics configuration (seed, n_boot, alpha)

    Returns:
        Metrics dict (JSON serializable)
    """
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Shape mismatch: y_true {y_true.shape} vs y_pred {y_pred.shape}")
    if y_true.size == 0:
        raise ValueError("Cannot compute metrics on an empty evaluation set")

    ci_kwargs = {"n_boot": stats_cfg.n_boot, "alpha": stats_cfg.alpha, "seed": stats_cfg.seed}
    rmse_ci = bootstrap_ci(y_true, y_pred, stat_fn=rmse, **ci_kwargs)
    r2_ci = bootstrap_ci(y_true, y_pred, stat_fn=_r2, **ci_kwargs)

    return {
        "n": int(y_true.size),
        "rmse": round(rmse(y_true, y_pred), 6),
        "rmse_ci_95": [round(v, 6) for v in rmse_ci],
        "mae": round(float(mean_absolute_error(y_true, y_pred)), 6),
        "r2": round(_r2(y_true, y_pred), 6),
        "r2_ci_95": [round(v, 6) for v in r2_ci],
    }


def compute_binary_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    stats_cfg: StatsConfig,
) -> dict:
    """Accuracy with a bootstrap CI, plus class balance."""
    y_true = np.asarray(y_true).astype(str)
    y_pred = np.asarray(y_pred).astype(str)
    if y_true.size == 0:
        raise ValueError("Cannot compute metrics on an empty evaluation set")

    acc_ci = bootstrap_ci(
        y_true,
        y_pred,
        stat_fn=lambda yt, yp: accuracy_score(yt, yp),
        n_boot=stats_cfg.n_boot,
        alpha=stats_cfg.alpha,
        seed=stats_cfg.seed,
    )
    labels, counts = np.unique(y_true, return_counts=True)
    return {
        "n": int(y_true.size),
        "accuracy": round(float(accuracy_score(y_true, y_pred)), 6),
        "accuracy_ci_95": [round(v, 6) for v in acc_ci],
        "support_per_class": dict(zip(labels.tolist(), counts.astype(int).tolist(), strict=True)),
    }
