"""Converters (dimensionality reduction)."""

from domain.converters.base import Converter
from domain.converters.lpp import LocalityPreservingProjections

__all__ = [
    "Converter",
    "LocalityPreservingProjections",
]
