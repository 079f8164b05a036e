"""
Configuration management: models, loading, and validation.

Handles:
- RunConfig: Main experiment configuration
- Kernel configs: kernel type + per-kernel params models
- Model, embedding and statistics settings
- Taxonomy loading from YAML

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import (
    bind_kernel_params,
    load_run_config,
    load_taxonomy_config,
)
from infrastructure.config.models import (
    # Column mapping
    DataColumnsConfig,
    # Section configs
    EmbeddingConfig,
    # Kernel params
    GaussianKernelParams,
    KernelConfig,
    # Enums
    KernelType,
    LinearKernelParams,
    MachineType,
    ModelConfig,
    PolynomialKernelParams,
    # Main config
    RunConfig,
    StatsConfig,
)

__all__ = [
    # Main config (most commonly used)
    "RunConfig",
    "load_run_config",
    # Enums
    "KernelType",
    "MachineType",
    # Sections
    "DataColumnsConfig",
    "KernelConfig",
    "ModelConfig",
    "EmbeddingConfig",
    "StatsConfig",
    # Kernel params
    "LinearKernelParams",
    "GaussianKernelParams",
    "PolynomialKernelParams",
    # Loaders
    "bind_kernel_params",
    "load_taxonomy_config",
]
