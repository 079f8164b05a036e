"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the main workflows for training, evaluation and embedding.
"""

from application.data import PreparedData, prepare_dataset, resolve_feature_columns, split_dataset
from application.embedding import run_embedding
from application.evaluation import log_evaluation_summary, run_evaluation
from application.serialize import attach_and_serialize_predictions, build_prediction_records
from application.training import TrainingResult, fit_machine, predict, run_training

__all__ = [
    # Main workflows
    "run_training",
    "run_evaluation",
    "run_embedding",
    "log_evaluation_summary",
    # Data utilities
    "PreparedData",
    "prepare_dataset",
    "resolve_feature_columns",
    "split_dataset",
    # Training helpers
    "TrainingResult",
    "fit_machine",
    "predict",
    # Serialization
    "attach_and_serialize_predictions",
    "build_prediction_records",
]
