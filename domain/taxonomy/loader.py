"""Parse taxonomy configuration from YAML dict."""

from typing import Any

from pydantic import ValidationError

from domain.schemas import TaxonomySpec
from domain.taxonomy.tree import Taxonomy


def build_taxonomy(spec: TaxonomySpec) -> Taxonomy:
    """Create a Taxonomy by applying the parsed edges in declaration order."""
    taxonomy = Taxonomy(root_beta=spec.root_weight)
    for edge in spec.nodes:
        taxonomy.add_node(edge.parent, edge.name, edge.weight)
    return taxonomy


def parse_taxonomy_config(data: dict[str, Any]) -> Taxonomy:
    """
    Parse pre-loaded YAML dict into Taxonomy object.

    This is a pure function - it does NOT perform file I/O.
    The YAML loading happens in infrastructure.config.loader.

    Args:
        data: Dictionary from yaml.safe_load()

    Returns:
        Taxonomy with every declared node attached

    Raises:
        ValueError: If required keys are missing or have wrong types
        KeyError: If an edge references a parent declared later (or never)
    """
    nodes = data.get("nodes", []) or []
    if not isinstance(nodes, list):
        raise ValueError("nodes must be a list of {parent, name, weight} mappings")

    try:
        spec = TaxonomySpec(root_weight=data.get("root_weight", 1.0), nodes=nodes)
    except ValidationError as e:
        raise ValueError(f"Invalid taxonomy config: {e}") from e

    return build_taxonomy(spec)


def taxonomy_to_config(taxonomy: Taxonomy) -> dict[str, Any]:
    """Inverse of parse_taxonomy_config: a YAML/JSON friendly dict."""
    return {
        "root_weight": taxonomy.get_node_weight(0),
        "nodes": [
            {"parent": parent, "name": name, "weight": weight} for parent, name, weight in taxonomy.edges()
        ],
    }
