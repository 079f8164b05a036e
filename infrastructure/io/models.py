"""Persistence of trained machines and fitted converters (joblib)."""

import logging
from pathlib import Path
from typing import Any

import joblib

from domain.converters import Converter
from domain.machines import Machine

logger = logging.getLogger(__name__)

MODEL_FORMAT_VERSION = 1


def save_model(obj: Machine | Converter, path: Path, *, compress: int = 3) -> Path:
    """
    Persist a trained machine or fitted converter.

    The artifact is a joblib dump of {"format_version", "class_name", "object"}.

    Raises:
        ValueError: If the object is not trained/fitted yet
        TypeError: If the object is neither a Machine nor a Converter
    """
    if isinstance(obj, Machine):
        ready = obj.is_trained
    elif isinstance(obj, Converter):
        ready = obj.is_fitted
    else:
        raise TypeError(f"Cannot persist object of type {type(obj).__name__}")
    if not ready:
        raise ValueError(f"Refusing to save untrained {type(obj).__name__}")

    path.parent.mkdir(parents=True, exist_ok=True)
    payload: dict[str, Any] = {
        "format_version": MODEL_FORMAT_VERSION,
        "class_name": type(obj).__name__,
        "object": obj,
    }
    joblib.dump(payload, path, compress=compress)
    logger.info("Saved %s to %s", type(obj).__name__, path)
    return path


def load_model(path: Path, expected_type: type | tuple[type, ...] = (Machine, Converter)) -> Any:
    """
    Load an artifact written by save_model.

    Args:
        path: Artifact path
        expected_type: Class (or tuple of classes) the loaded object must be an instance of

    Raises:
        FileNotFoundError: If the artifact does not exist
        ValueError: If the artifact is not a save_model payload or has another format version
        TypeError: If the stored object has an unexpected type
    """
    if not path.exists():
        raise FileNotFoundError(f"Model artifact not found: {path}")

    payload = joblib.load(path)
    if not isinstance(payload, dict) or "object" not in payload:
        raise ValueError(f"Not a model artifact: {path}")

    version = payload.get("format_version")
    if version != MODEL_FORMAT_VERSION:
        raise ValueError(f"Unsupported model format version {version!r} in {path} (expected {MODEL_FORMAT_VERSION})")

    obj = payload["object"]
    if not isinstance(obj, expected_type):
        raise TypeError(f"Artifact {path} holds {type(obj).__name__}, expected {expected_type}")

    logger.info("Loaded %s from %s", payload.get("class_name"), path)
    return obj
