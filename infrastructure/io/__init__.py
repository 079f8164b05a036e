"""I/O utilities: filesystem operations, dataset loading and model persistence."""

from infrastructure.io.datasets import read_table, write_table
from infrastructure.io.fs import ensure_exists, write_json
from infrastructure.io.models import load_model, save_model

__all__ = [
    "ensure_exists",
    "write_json",
    "read_table",
    "write_table",
    "save_model",
    "load_model",
]
