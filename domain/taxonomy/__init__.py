"""
Task taxonomy: tree structure, node registry and configuration parsing.

All functions in this module are pure (no file I/O).
"""

from domain.taxonomy.loader import build_taxonomy, parse_taxonomy_config, taxonomy_to_config
from domain.taxonomy.tree import ROOT_NAME, Taxonomy, TaxonomyNode

__all__ = [
    "ROOT_NAME",
    "Taxonomy",
    "TaxonomyNode",
    "build_taxonomy",
    "parse_taxonomy_config",
    "taxonomy_to_config",
]
