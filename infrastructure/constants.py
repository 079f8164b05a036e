from pathlib import Path

# Repo-root conventional directories/files (overrideable via experiment.yaml)
CONFIG_DIR = Path("configs")
EXPERIMENT_FILE = CONFIG_DIR / "experiment.yaml"
TAXONOMY_FILE = CONFIG_DIR / "taxonomy.yaml"

DATA_DIR = Path("dataset")

# Environment variables
ENV_OUTPUT_ROOT = "MTK_OUTPUT_ROOT"
ENV_TRACK_DISABLE = "OPIK_TRACK_DISABLE"
