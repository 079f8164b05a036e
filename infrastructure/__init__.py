"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains:
- Configuration loading (YAML, environment)
- Kernel / machine / converter factories and their registry
- Dataset and model artifact I/O
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    KernelType,
    MachineType,
    RunConfig,
    StatsConfig,
    load_run_config,
)

__all__ = [
    # Configuration (most commonly used)
    "load_run_config",
    "RunConfig",
    "KernelType",
    "MachineType",
    "StatsConfig",
]
