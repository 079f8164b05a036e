import pytest

from domain.taxonomy import parse_taxonomy_config, taxonomy_to_config


def test_parse_taxonomy_config_builds_tree() -> None:
    tax = parse_taxonomy_config(
        {
            "root_weight": 2.0,
            "nodes": [
                {"parent": "root", "name": "animals", "weight": 0.5},
                {"parent": "animals", "name": " cats ", "weight": 1.0},
                {"parent": "animals", "name": "dogs"},
            ],
        }
    )
    assert tax.num_nodes == 4
    assert tax.get_node_weight(0) == 2.0
    assert tax.get_node_weight(tax.get_id("dogs")) == 1.0  # default weight
    # names are stripped
    assert tax.compute_node_similarity(tax.get_id("cats"), tax.get_id("dogs")) == pytest.approx(2.5)


def test_empty_config_gives_root_only() -> None:
    tax = parse_taxonomy_config({})
    assert tax.num_nodes == 1


def test_children_before_parents_fail() -> None:
    with pytest.raises(KeyError):
        parse_taxonomy_config(
            {
                "nodes": [
                    {"parent": "animals", "name": "cats"},
                    {"parent": "root", "name": "animals"},
                ]
            }
        )


@pytest.mark.parametrize(
    "data",
    [
        {"nodes": {"parent": "root", "name": "x"}},
        {"nodes": [{"parent": "root"}]},
        {"nodes": [{"parent": "root", "name": "x", "weight": -1}]},
        {"root_weight": "heavy"},
    ],
)
def test_malformed_configs_raise_value_error(data: dict) -> None:
    with pytest.raises(ValueError):
        parse_taxonomy_config(data)


def test_taxonomy_to_config_is_parseable(small_taxonomy) -> None:
    rebuilt = parse_taxonomy_config(taxonomy_to_config(small_taxonomy))
    assert rebuilt.name2id == small_taxonomy.name2id
    assert (rebuilt.similarity_matrix() == small_taxonomy.similarity_matrix()).all()
