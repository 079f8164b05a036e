"""Application-level constants."""

import os
from pathlib import Path

from infrastructure.constants import ENV_OUTPUT_ROOT

# Column names attached to output tables
PRED_COL = "prediction"
INDEX_COL = "source_index"
EMBEDDING_COL_PREFIX = "lpp_"

# Output filenames
PREDICTIONS_FILENAME = "test_predictions.json"
METRICS_FILENAME = "metrics.json"
TASK_METRICS_FILENAME = "task_metrics.csv"
MODEL_FILENAME = "model.joblib"
CONVERTER_FILENAME = "converter.joblib"
EMBEDDING_FILENAME = "embedding.csv"
CONFIG_SNAPSHOT_FILENAME = "config.resolved.json"
DATA_FINGERPRINT_FILENAME = "data_fingerprint.json"

# Output directory structure
DEFAULT_OUTPUT_ROOT = Path("outputs")
LOG_FILENAME = "run.log"


def get_output_root() -> Path:
    """Root folder for per-run outputs; read at call time so a loaded .env can override it."""
    return Path(os.environ.get(ENV_OUTPUT_ROOT, str(DEFAULT_OUTPUT_ROOT)))
