"""Pydantic models for taxonomy files and serialized predictions."""

import math

from pydantic import BaseModel, Field, field_validator


class TaxonomyEdge(BaseModel):
    """One `parent -> name` edge of a taxonomy file."""

    parent: str = Field(..., min_length=1, description="Name of an already declared node (or 'root').")
    name: str = Field(..., min_length=1, description="Name of the new task node.")
    weight: float = Field(default=1.0, description="Node weight (beta) used in task similarity.")

    @field_validator("parent", "name", mode="before")
    @classmethod
    def _strip(cls, v: object) -> str:
        return str(v).strip()

    @field_validator("weight")
    @classmethod
    def _finite_non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"weight must be finite and non-negative, got {v}")
        return v


class TaxonomySpec(BaseModel):
    """Whole taxonomy file: root weight plus edges in declaration order."""

    root_weight: float = 1.0
    nodes: list[TaxonomyEdge] = Field(default_factory=list)


class PredictionRecord(BaseModel):
    """Single held-out example with its prediction, as written to test_predictions.json."""

    index: int = Field(..., description="Row index in the source table.")
    task: str | None = Field(default=None, description="Task name the example belongs to.")
    target: float | str | None = Field(default=None, description="Ground-truth target, if available.")
    prediction: float | str = Field(..., description="Model output for this example.")
