import pytest

from forestry_common import SerializationError
from forestry_structures import (
    TreeNode,
    TreeNodeConfig,
    build,
    filter_forest,
    find_node,
    find_path,
    forest_to_dicts,
    get_parents_names,
    walk,
)

# (Company (Sales East West) (Engineering (Platform Storage)))  (Board)
RECORDS = [
    {"id": "co", "parentId": None, "name": "Company", "weight": 1},
    {"id": "board", "parentId": None, "name": "Board", "weight": 2},
    {"id": "sales", "parentId": "co", "name": "Sales", "weight": 1},
    {"id": "eng", "parentId": "co", "name": "Engineering", "weight": 2},
    {"id": "east", "parentId": "sales", "name": "East", "weight": 1},
    {"id": "west", "parentId": "sales", "name": "West", "weight": 2},
    {"id": "platform", "parentId": "eng", "name": "Platform"},
    {"id": "storage", "parentId": "platform", "name": "Storage", "budget": 10},
]


def make_forest():
    return build(RECORDS, None, TreeNodeConfig())


def test_walk():
    assert [node.id for node in walk(make_forest())] == [
        "co", "sales", "east", "west", "eng", "platform", "storage", "board",
    ]


def test_find_node():
    forest = make_forest()
    assert find_node(forest, "storage").extra == {"budget": 10}
    assert find_node(forest, "board").name == "Board"
    assert find_node(forest, "nope") is None


def test_find_path():
    forest = make_forest()
    assert [node.id for node in find_path(forest, "storage")] == [
        "co", "eng", "platform", "storage",
    ]
    assert [node.id for node in find_path(forest, "board")] == ["board"]
    assert find_path(forest, "nope") == []


def test_get_parents_names():
    forest = make_forest()
    assert get_parents_names(forest, "storage") == ["Platform", "Engineering", "Company"]
    assert get_parents_names(forest, "storage", include_self=True) == [
        "Storage", "Platform", "Engineering", "Company",
    ]
    assert get_parents_names(forest, "co") == []
    assert get_parents_names(forest, "nope") == []


def test_filter_forest_keeps_ancestors():
    forest = make_forest()
    filtered = filter_forest(forest, lambda node: node.name in ("West", "Storage"))
    assert [node.id for node in walk(filtered)] == [
        "co", "sales", "west", "eng", "platform", "storage",
    ]
    # the original forest is untouched
    assert forest == make_forest()


def test_filter_forest_matching_nothing():
    assert filter_forest(make_forest(), lambda node: False) == []


def test_filter_forest_copies_extra():
    forest = make_forest()
    filtered = filter_forest(forest, lambda node: node.id == "storage")
    storage = find_node(filtered, "storage")
    storage.extra["budget"] = 99
    assert find_node(forest, "storage").extra == {"budget": 10}


def test_forest_to_dicts():
    config = TreeNodeConfig(children_key="sub")
    dicts = forest_to_dicts(make_forest(), config)
    assert [d["id"] for d in dicts] == ["co", "board"]
    assert [d["name"] for d in dicts[0]["sub"]] == ["Sales", "Engineering"]
    assert "sub" not in dicts[1]


def test_forest_to_dicts_reports_failing_root():
    with pytest.raises(SerializationError) as exc_info:
        forest_to_dicts(make_forest(), config=object())
    assert exc_info.value.context["type"] == "TreeNode"
    assert exc_info.value.context["index"] == 0
    assert isinstance(exc_info.value.__cause__, AttributeError)


def test_find_path_in_deep_chain():
    depth = 20000
    records = [{"id": i, "parentId": i - 1, "name": str(i)} for i in range(1, depth + 1)]
    forest = build(records, 0, TreeNodeConfig())
    path = find_path(forest, depth)
    assert len(path) == depth
    assert path[0].id == 1
    assert path[-1].id == depth
    assert [node.id for node in path[:3]] == [1, 2, 3]


def test_find_path_with_repeated_ids():
    # hand-made forest where "leaf" appears under two branches
    first = TreeNode(id="leaf", parent_id="a", name="first")
    second = TreeNode(id="leaf", parent_id="b", name="second")
    forest = [
        TreeNode(id="a", name="A", children=[TreeNode(id="x", parent_id="a", children=[first])]),
        TreeNode(id="b", name="B", children=[second]),
    ]
    path = find_path(forest, "leaf")
    assert [node.name for node in path] == ["A", None, "first"]
    assert path[-1] is first
