"""
Domain layer: learning algorithms with minimal external dependencies.

Contains:
- taxonomy: task tree and node registry
- kernels: kernel functions and normalizers (incl. the multitask tree normalizer)
- converters: dimensionality reduction (Locality Preserving Projections)
- machines: kernel ridge models
- evaluation: metrics and statistical analysis
- schemas: Pydantic models for taxonomy files and prediction records
"""

from domain.schemas import PredictionRecord, TaxonomyEdge, TaxonomySpec

__all__ = [
    "PredictionRecord",
    "TaxonomyEdge",
    "TaxonomySpec",
]
