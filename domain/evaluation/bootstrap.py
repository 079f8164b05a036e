"""Bootstrap confidence interval computation."""

import warnings
from collections.abc import Callable

import numpy as np
from sklearn.exceptions import UndefinedMetricWarning


def bootstrap_ci(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    stat_fn: Callable[[np.ndarray, np.ndarray], float],
    n_boot: int,
    alpha: float,
    seed: int,
) -> tuple[float, float]:
    """
    Non-parametric bootstrap CI for a statistic (e.g., RMSE, R^2, accuracy).

    Args:
        y_true: Ground-truth targets
        y_pred: Predicted targets
        stat_fn: Function that computes a metric from (y_true, y_pred)
        n_boot: Number of bootstrap samples
        alpha: Significance level (e.g., 0.05 for 95% CI)
        seed: Random seed for reproducibility

    Returns:
        Tuple of (lower, upper) confidence interval bounds; (nan, nan) when
        there are fewer than two examples
    """
    n = len(y_true)
    if n < 2 or n_boot <= 0:
        return float("nan"), float("nan")

    rng = np.random.default_rng(seed)
    stats = np.empty(n_boot, dtype=float)

    for b in range(n_boot):
        sample_idx = rng.integers(0, n, size=n)
        with warnings.catch_warnings():
            # Degenerate resamples (constant targets, single class) are expected
            warnings.filterwarnings("ignore", category=UndefinedMetricWarning)
            warnings.filterwarnings("ignore", category=RuntimeWarning)
            stats[b] = stat_fn(y_true[sample_idx], y_pred[sample_idx])

    lower = float(np.nanpercentile(stats, 100 * (alpha / 2)))
    upper = float(np.nanpercentile(stats, 100 * (1 - alpha / 2)))
    return lower, upper
