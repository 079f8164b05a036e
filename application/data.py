"""Dataset preparation: column resolution, cleaning and train/test splitting."""

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from infrastructure.config.models import MachineType, RunConfig

logger = logging.getLogger(__name__)


@dataclass
class PreparedData:
    """Numeric views of a cleaned input table."""

    frame: pd.DataFrame
    feature_cols: list[str]
    features: np.ndarray
    target: np.ndarray | None
    tasks: list[str] | None


def resolve_feature_columns(cfg: RunConfig, df: pd.DataFrame) -> list[str]:
    """
    Resolve the feature columns: the configured list, or every numeric column except task/target.

    Raises:
        KeyError: If a configured feature column is missing
        ValueError: If no feature column remains
    """
    if cfg.columns.feature_cols:
        missing = [c for c in cfg.columns.feature_cols if c not in df.columns]
        if missing:
            raise KeyError(f"Configured feature_cols {missing} not found in dataset columns: {list(df.columns)}")
        return list(cfg.columns.feature_cols)

    excluded = {cfg.columns.task_col, cfg.columns.target_col}
    cols = [c for c in df.select_dtypes(include="number").columns if c not in excluded]
    if not cols:
        raise ValueError("No numeric feature columns found; set columns.feature_cols in experiment.yaml")
    return cols


def prepare_dataset(cfg: RunConfig, df: pd.DataFrame, *, require_target: bool = True) -> PreparedData:
    """
    Select and clean the columns a run needs.

    Args:
        cfg: RunConfig instance
        df: Raw input table
        require_target: Whether the target column must be configured and present

    Returns:
        PreparedData with rows containing missing values dropped

    Raises:
        ValueError: If a target is required but not configured
        KeyError: If a configured column is missing, or tasks are not in the taxonomy
    """
    feature_cols = resolve_feature_columns(cfg, df)
    task_col = cfg.columns.task_col
    target_col = cfg.columns.target_col

    if task_col is not None and task_col not in df.columns:
        raise KeyError(f"Configured task_col='{task_col}' not found in dataset columns: {list(df.columns)}")

    if require_target:
        if not target_col:
            raise ValueError("columns.target_col is required for training")
        if target_col not in df.columns:
            raise KeyError(f"Configured target_col='{target_col}' not found in dataset columns: {list(df.columns)}")
    elif target_col is not None and target_col not in df.columns:
        logger.warning("Configured target_col='%s' not found in dataset; ignoring it.", target_col)
        target_col = None

    used = feature_cols + [c for c in (task_col, target_col) if c is not None]
    frame = df.dropna(subset=used)
    dropped = len(df) - len(frame)
    if dropped:
        logger.warning("Dropped %d of %d rows with missing values in %s", dropped, len(df), used)
    if frame.empty:
        raise ValueError("No rows left after dropping missing values")

    tasks: list[str] | None = None
    if task_col is not None:
        tasks = frame[task_col].astype(str).str.strip().tolist()
        if cfg.model.machine is MachineType.MULTITASK_KRR:
            unknown = sorted({t for t in tasks if t not in cfg.taxonomy})
            if unknown:
                raise KeyError(f"Tasks not present in the taxonomy: {unknown}")

    target: np.ndarray | None = None
    if target_col is not None:
        if cfg.model.machine is MachineType.KRR_CLASSIFIER:
            target = frame[target_col].to_numpy()
        else:
            target = frame[target_col].to_numpy(dtype=float)

    return PreparedData(
        frame=frame,
        feature_cols=feature_cols,
        features=frame[feature_cols].to_numpy(dtype=float),
        target=target,
        tasks=tasks,
    )


def _can_stratify(labels: list, n_items: int, test_size: float) -> bool:
    values, counts = np.unique(np.asarray(labels, dtype=str), return_counts=True)
    n_test = math.ceil(test_size * n_items)
    n_train = n_items - n_test
    return bool(counts.min() >= 2 and n_test >= len(values) and n_train >= len(values))


def split_dataset(cfg: RunConfig, data: PreparedData) -> tuple[np.ndarray, np.ndarray]:
    """
    Split row positions into train/test, stratified when the data allows it.

    Stratification uses the class labels for the classifier and the tasks otherwise.

    Returns:
        Tuple of (train_positions, test_positions)
    """
    n_items = data.features.shape[0]
    if n_items < 2:
        raise ValueError(f"Need at least 2 rows to split, got {n_items}")

    if cfg.model.machine is MachineType.KRR_CLASSIFIER and data.target is not None:
        strata = data.target.tolist()
    else:
        strata = data.tasks

    stratify = None
    if strata is not None and _can_stratify(strata, n_items, cfg.model.test_size):
        stratify = np.asarray(strata, dtype=str)
    elif strata is not None:
        logger.info("Too few rows per group for a stratified split; splitting at random.")

    positions = np.arange(n_items)
    train_pos, test_pos = train_test_split(
        positions,
        test_size=cfg.model.test_size,
        random_state=cfg.stats.seed,
        stratify=stratify,
    )
    logger.info("Split %d rows into train=%d, test=%d", n_items, len(train_pos), len(test_pos))
    return np.sort(train_pos), np.sort(test_pos)
