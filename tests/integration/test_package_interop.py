"""Integration tests to verify interoperability between forestry packages."""

import json

import pytest


def test_structures_package_imports():
    """Test that structures package exports are accessible."""
    from forestry_structures import TreeBuilder, TreeNode, TreeNodeConfig, build

    forest = build([{"id": 1, "parentId": None}], None, TreeNodeConfig())
    assert isinstance(forest[0], TreeNode)
    assert TreeBuilder(TreeNodeConfig()).config == TreeNodeConfig()


def test_structures_errors_are_common_errors():
    """Builder errors can be caught through the common base exception."""
    from forestry_common import ForestryError, ValidationError
    from forestry_structures import InvalidInputError, TreeNodeConfig, build

    with pytest.raises(ForestryError) as exc_info:
        build(None, None, TreeNodeConfig())
    assert isinstance(exc_info.value, InvalidInputError)
    assert isinstance(exc_info.value, ValidationError)


def test_forest_serializes_to_json():
    """A forest goes through common serialization and out as JSON."""
    from forestry_common import serialize_list
    from forestry_structures import TreeNodeConfig, build

    records = [
        {"id": 1, "parentId": 0, "name": "root", "weight": 0},
        {"id": 2, "parentId": 1, "name": "a", "weight": 2},
        {"id": 3, "parentId": 1, "name": "b", "weight": 1},
    ]
    forest = build(records, 0, TreeNodeConfig())
    payload = json.loads(json.dumps(serialize_list(forest)))
    assert payload == [
        {
            "id": 1,
            "parentId": 0,
            "name": "root",
            "weight": 0,
            "children": [
                {"id": 3, "parentId": 1, "name": "b", "weight": 1},
                {"id": 2, "parentId": 1, "name": "a", "weight": 2},
            ],
        }
    ]


def test_config_loaded_from_settings_drives_build():
    from forestry_structures import TreeNodeConfig, build, forest_to_dicts

    settings = json.loads('{"id_key": "code", "parent_id_key": "up", "children_key": "kids"}')
    config = TreeNodeConfig.from_dict(settings)
    forest = build(
        [{"code": "a", "up": None}, {"code": "b", "up": "a"}], None, config
    )
    assert forest_to_dicts(forest, config) == [
        {"code": "a", "up": None, "name": None, "kids": [{"code": "b", "up": "a", "name": None}]}
    ]
