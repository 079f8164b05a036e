"""Training workflow: prepare data, fit the configured machine, predict the held-out split."""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from opik import track

from application.constants import PRED_COL
from application.data import PreparedData, prepare_dataset, split_dataset
from domain.machines import Machine, MultitaskKernelRidgeRegression
from infrastructure.config.models import RunConfig
from infrastructure.factory import make_machine
from infrastructure.observability.logging import clear_stage_context, set_log_context

logger = logging.getLogger(__name__)


@dataclass
class TrainingResult:
    """Trained machine plus the frames it was trained and evaluated on."""

    machine: Machine
    feature_cols: list[str]
    train_df: pd.DataFrame
    test_df_out: pd.DataFrame


def _task_names(data: PreparedData, positions: np.ndarray) -> list[str]:
    if data.tasks is None:
        raise ValueError("The multitask machine needs a task column (columns.task_col)")
    return [data.tasks[i] for i in positions]


def fit_machine(machine: Machine, data: PreparedData, positions: np.ndarray) -> Machine:
    """
    Train `machine` on the given row positions.

    Raises:
        ValueError: If the data has no target, or no tasks for a multitask machine
    """
    if data.target is None:
        raise ValueError("Training needs a target column (columns.target_col)")
    x = data.features[positions]
    y = data.target[positions]
    if isinstance(machine, MultitaskKernelRidgeRegression):
        return machine.train(x, y, _task_names(data, positions))
    return machine.train(x, y)


def predict(machine: Machine, data: PreparedData, positions: np.ndarray) -> np.ndarray:
    """Apply a trained `machine` to the given row positions."""
    x = data.features[positions]
    if isinstance(machine, MultitaskKernelRidgeRegression):
        return machine.apply(x, _task_names(data, positions))
    return machine.apply(x)


@track(
    name="Multitask.training",
    type="general",
    metadata={"task": "multitask_kernel_training"},
    capture_input=False,
    capture_output=False,
)
def run_training(cfg: RunConfig, df: pd.DataFrame) -> TrainingResult:
    """
    Train the configured machine on a random split of `df` and predict the held-out rows.

    Args:
        cfg: RunConfig instance
        df: Raw input table

    Returns:
        TrainingResult with the prediction column attached to the held-out frame
    """
    set_log_context(stage="train", kernel=cfg.kernel.type.value, machine=cfg.model.machine.value)

    data = prepare_dataset(cfg, df, require_target=True)
    logger.info(
        "Prepared %d rows, %d features%s",
        data.features.shape[0],
        data.features.shape[1],
        f", {len(set(data.tasks))} tasks" if data.tasks is not None else "",
    )

    train_pos, test_pos = split_dataset(cfg, data)

    machine = make_machine(cfg)
    fit_machine(machine, data, train_pos)
    logger.info("Trained %s on %d rows", type(machine).__name__, len(train_pos))

    test_df_out = data.frame.iloc[test_pos].copy()
    test_df_out[PRED_COL] = predict(machine, data, test_pos)

    clear_stage_context()
    return TrainingResult(
        machine=machine,
        feature_cols=data.feature_cols,
        train_df=data.frame.iloc[train_pos].copy(),
        test_df_out=test_df_out,
    )
