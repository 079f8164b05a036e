"""Configuration models (Pydantic classes)."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.taxonomy.tree import Taxonomy
from infrastructure.constants import TAXONOMY_FILE


class KernelType(str, Enum):
    """Supported kernel functions."""

    LINEAR = "linear"
    GAUSSIAN = "gaussian"
    POLYNOMIAL = "polynomial"


class MachineType(str, Enum):
    """Supported trainable models."""

    MULTITASK_KRR = "multitask_krr"
    KRR = "krr"
    KRR_CLASSIFIER = "krr_classifier"


class LinearKernelParams(BaseModel):
    """Linear kernel has no parameters."""

    model_config = ConfigDict(extra="forbid")


class GaussianKernelParams(BaseModel):
    """Gaussian kernel parameters."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=1.0, gt=0, description="exp(-||x-y||^2 / width)")


class PolynomialKernelParams(BaseModel):
    """Polynomial kernel parameters."""

    model_config = ConfigDict(extra="forbid")

    degree: int = Field(default=2, ge=1)
    inhomogeneous: bool = True


class KernelConfig(BaseModel):
    """Kernel selection; `params` is bound to the per-kernel params model by the loader."""

    type: KernelType = KernelType.GAUSSIAN
    params: dict[str, Any] = Field(default_factory=dict)


class DataColumnsConfig(BaseModel):
    """Column name mapping for the input table."""

    # None -> every numeric column except task/target
    feature_cols: list[str] | None = None
    task_col: str | None = None
    target_col: str | None = None


class ModelConfig(BaseModel):
    """Model selection and training settings."""

    machine: MachineType = MachineType.MULTITASK_KRR
    tau: float = Field(default=1e-3, ge=0, description="Ridge added to the kernel matrix diagonal.")
    test_size: float = Field(default=0.25, gt=0, lt=1, description="Held-out fraction.")
    node_weights: dict[str, float] = Field(
        default_factory=dict,
        description="Task name -> weight overrides applied to the taxonomy after loading.",
    )


class EmbeddingConfig(BaseModel):
    """Locality Preserving Projections settings."""

    target_dim: int = Field(default=2, ge=1)
    k: int = Field(default=10, ge=1, description="Number of nearest neighbours.")
    width: float = Field(default=1.0, gt=0, description="Heat kernel width.")
    n_jobs: int | None = Field(default=None, description="Neighbour search workers (-1 = all cores).")


class StatsConfig(BaseModel):
    """Configuration for evaluation statistics."""

    seed: int = 42
    n_boot: int = Field(default=1000, ge=0)
    alpha: float = Field(default=0.05, gt=0, lt=1)


class RunConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from experiment.yaml
    - Validated and enriched by configuration loader
    - Consumed by the training/embedding workflows
    - Contains both user-specified and resolved fields
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data_file_path: Path = Field(..., description="Path to the input table (CSV, TSV or Excel).")
    columns: DataColumnsConfig = Field(default_factory=DataColumnsConfig)

    # Taxonomy (resolved by loader)
    taxonomy_file: Path | None = Field(default_factory=lambda: TAXONOMY_FILE)
    taxonomy: Taxonomy = Field(default_factory=Taxonomy, exclude=True)

    kernel: KernelConfig = Field(default_factory=KernelConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)

    @model_validator(mode="after")
    def _validate(self) -> "RunConfig":
        if self.columns.task_col is not None and not str(self.columns.task_col).strip():
            self.columns.task_col = None
        if self.columns.feature_cols is not None and not self.columns.feature_cols:
            raise ValueError("columns.feature_cols must not be empty when given")

        if self.model.machine is MachineType.MULTITASK_KRR and self.columns.target_col and not self.columns.task_col:
            raise ValueError("columns.task_col is required when model.machine=multitask_krr")

        for name in self.model.node_weights:
            if name not in self.taxonomy:
                raise ValueError(f"model.node_weights refers to unknown task {name!r}")

        return self

