"""Embedding workflow: Locality Preserving Projections over a table."""

import logging

import pandas as pd
from opik import track

from application.constants import EMBEDDING_COL_PREFIX, INDEX_COL
from application.data import prepare_dataset
from domain.converters import LocalityPreservingProjections
from infrastructure.config.models import RunConfig
from infrastructure.factory import make_converter
from infrastructure.observability.logging import clear_stage_context, set_log_context

logger = logging.getLogger(__name__)


@track(
    name="Multitask.embedding",
    type="general",
    metadata={"task": "lpp_embedding"},
    capture_input=False,
    capture_output=False,
)
def run_embedding(cfg: RunConfig, df: pd.DataFrame) -> tuple[LocalityPreservingProjections, pd.DataFrame]:
    """
    Fit LPP on the table's feature columns and return the embedding.

    The returned frame has the source row index, one `lpp_<i>` column per
    target dimension and, when configured, the task column.
    """
    set_log_context(stage="embed")

    data = prepare_dataset(cfg, df, require_target=False)
    converter = make_converter(cfg)
    logger.info(
        "Embedding %d rows x %d features -> %d dims (k=%d, width=%g)",
        data.features.shape[0],
        data.features.shape[1],
        converter.target_dim,
        converter.k,
        converter.width,
    )
    embedding = converter.embed(data.features)

    out = pd.DataFrame(
        embedding,
        columns=[f"{EMBEDDING_COL_PREFIX}{i}" for i in range(embedding.shape[1])],
    )
    out.insert(0, INDEX_COL, data.frame.index.to_numpy())
    if data.tasks is not None and cfg.columns.task_col is not None:
        out.insert(1, cfg.columns.task_col, data.tasks)

    clear_stage_context()
    return converter, out
