import os

# Workflows are decorated with opik.track; tests never talk to an Opik server.
os.environ.setdefault("OPIK_TRACK_DISABLE", "true")

import pytest  # noqa: E402

from domain.taxonomy import Taxonomy  # noqa: E402


@pytest.fixture
def small_taxonomy() -> Taxonomy:
    """
    root(1.0)
    ├── A(0.5)
    │   ├── A1(1.0)
    │   └── A2(1.0)
    └── B(0.5)
        └── B1(1.0)
    """
    tax = Taxonomy()
    tax.add_node("root", "A", 0.5)
    tax.add_node("root", "B", 0.5)
    tax.add_node("A", "A1", 1.0)
    tax.add_node("A", "A2", 1.0)
    tax.add_node("B", "B1", 1.0)
    return tax
