"""Configuration loading from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from domain.taxonomy.loader import parse_taxonomy_config
from domain.taxonomy.tree import Taxonomy
from infrastructure.config.models import (
    DataColumnsConfig,
    EmbeddingConfig,
    KernelConfig,
    KernelType,
    ModelConfig,
    RunConfig,
    StatsConfig,
)
from infrastructure.constants import DATA_DIR, TAXONOMY_FILE

from .registry import PARAM_MODEL_BY_KERNEL

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def load_taxonomy_config(path: Path) -> Taxonomy:
    """
    Load taxonomy from YAML file.

    This function handles file I/O, then delegates parsing to domain layer.
    """
    data = _load_yaml(path)
    taxonomy = parse_taxonomy_config(data)
    logger.debug("Loaded taxonomy from %s: %r", path, taxonomy)
    return taxonomy


def bind_kernel_params(kernel: KernelConfig) -> BaseModel:
    """
    Validate a kernel's free-form `params` against the params model registered for its type.

    Raises:
        ValueError: If no params model is registered or the params are invalid
    """
    param_model_cls = PARAM_MODEL_BY_KERNEL.get(kernel.type)
    if param_model_cls is None:
        raise ValueError(f"No param model registered for kernel: {kernel.type.value}")
    try:
        return param_model_cls(**kernel.params)
    except ValidationError as e:
        raise ValueError(f"Invalid params for kernel '{kernel.type.value}': {e}") from e


def _section(exp: dict[str, Any], key: str) -> dict[str, Any]:
    block = exp.get(key) or {}
    if not isinstance(block, dict):
        raise ValueError(f"experiment.yaml key '{key}' must be a mapping, got {type(block).__name__}")
    return block


def load_run_config(experiment_path: Path) -> RunConfig:
    """
    Load experiment.yaml and construct a fully-resolved RunConfig.

    Resolution steps:
    - `data_file` is joined onto `data_dir` (default: dataset/)
    - the taxonomy file is loaded (if one exists) and `model.node_weights` applied to it
    - kernel params are validated against the params model registered for the kernel type
    """
    exp = _load_yaml(experiment_path)

    if "data_file" not in exp or not exp.get("data_file"):
        raise ValueError("experiment.yaml missing required key: data_file")

    data_dir = Path(exp.get("data_dir", str(DATA_DIR)))
    data_file_path = data_dir / exp["data_file"]

    taxonomy_file: Path | None = Path(exp.get("taxonomy_file", str(TAXONOMY_FILE)))
    if taxonomy_file.exists():
        taxonomy = load_taxonomy_config(taxonomy_file)
    elif "taxonomy_file" in exp:
        raise FileNotFoundError(f"Taxonomy file not found: {taxonomy_file}")
    else:
        logger.info("No taxonomy file at %s; using a root-only taxonomy.", taxonomy_file)
        taxonomy_file = None
        taxonomy = Taxonomy()

    kernel_block = _section(exp, "kernel")
    kernel = KernelConfig(
        type=KernelType(str(kernel_block.get("type", KernelType.GAUSSIAN.value)).strip().lower()),
        params=dict(kernel_block.get("params") or {}),
    )
    bound = bind_kernel_params(kernel)
    kernel.params = bound.model_dump()

    model = ModelConfig(**_section(exp, "model"))
    for name, weight in model.node_weights.items():
        if name in taxonomy:
            taxonomy.set_node_weight(taxonomy.get_id(name), weight)

    cfg = RunConfig(
        data_file_path=data_file_path,
        columns=DataColumnsConfig(**_section(exp, "columns")),
        taxonomy_file=taxonomy_file,
        taxonomy=taxonomy,
        kernel=kernel,
        model=model,
        embedding=EmbeddingConfig(**_section(exp, "embedding")),
        stats=StatsConfig(**_section(exp, "stats")),
    )

    return cfg
