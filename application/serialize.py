"""Prediction serialization utilities."""

import json
import logging
from pathlib import Path

import numpy as np
import pandas as pd

from application.constants import PRED_COL
from domain.schemas import PredictionRecord
from infrastructure.config import RunConfig

logger = logging.getLogger(__name__)


def _py(value: object) -> object:
    """Convert numpy scalars to plain Python values."""
    return value.item() if isinstance(value, np.generic) else value


def build_prediction_records(cfg: RunConfig, test_df_out: pd.DataFrame) -> list[PredictionRecord]:
    """One PredictionRecord per held-out row, in frame order."""
    task_col = cfg.columns.task_col
    target_col = cfg.columns.target_col

    records: list[PredictionRecord] = []
    for idx, row in test_df_out.iterrows():
        records.append(
            PredictionRecord(
                index=int(idx),
                task=str(row[task_col]) if task_col is not None and task_col in test_df_out.columns else None,
                target=_py(row[target_col]) if target_col is not None and target_col in test_df_out.columns else None,
                prediction=_py(row[PRED_COL]),
            )
        )
    return records


def attach_and_serialize_predictions(
    cfg: RunConfig,
    test_df_out: pd.DataFrame,
    predictions_path: Path,
) -> Path:
    """
    Write the held-out predictions to predictions_path as a JSON list of records.
    """
    if PRED_COL not in test_df_out.columns:
        raise KeyError(f"Prediction column '{PRED_COL}' missing; run training first.")

    records = build_prediction_records(cfg, test_df_out)

    predictions_path.parent.mkdir(parents=True, exist_ok=True)
    with predictions_path.open("w", encoding="utf-8") as f:
        json.dump([r.model_dump() for r in records], f, ensure_ascii=False, indent=2)

    logger.info("Saved predictions JSON: %s (%d records)", predictions_path, len(records))
    return predictions_path
