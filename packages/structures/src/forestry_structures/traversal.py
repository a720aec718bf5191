"""Lookups and transformations over an assembled forest.

A forest is a plain list of root ``TreeNode`` objects. These helpers never
modify the forest they are given.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Dict, List

from forestry_common.serialization import serialize_list
from forestry_structures.config import TreeNodeConfig
from forestry_structures.node import TreeNode


def walk(forest: List[TreeNode]) -> Iterator[TreeNode]:
    """Iterate over every node of every tree, depth-first pre-order."""
    for root in forest:
        yield from root.walk()


def find_node(forest: List[TreeNode], node_id: Any) -> TreeNode | None:
    """Return the first node whose id equals node_id, or None."""
    for node in walk(forest):
        if node.id == node_id:
            return node
    return None


def find_path(forest: List[TreeNode], node_id: Any) -> List[TreeNode]:
    """Return the nodes from a root down to the node with node_id.

    Returns:
        [root, ..., node], or an empty list when node_id is not in the forest.
    """
    # keyed by id() since node ids need not be unique in a hand-made forest
    parent_of: Dict[int, TreeNode | None] = {}
    stack: List[TreeNode] = []
    for root in reversed(forest):
        parent_of[id(root)] = None
        stack.append(root)
    while stack:
        node = stack.pop()
        if node.id == node_id:
            path: List[TreeNode] = []
            current: TreeNode | None = node
            while current is not None:
                path.append(current)
                current = parent_of[id(current)]
            path.reverse()
            return path
        for child in reversed(node.children):
            parent_of[id(child)] = node
            stack.append(child)
    return []


def get_parents_names(
    forest: List[TreeNode],
    node_id: Any,
    include_self: bool = False,
) -> List[Any]:
    """Collect the names of a node's ancestors, nearest parent first.

    Args:
        forest: The forest to search.
        node_id: Id of the node whose ancestry is wanted.
        include_self: Also put the node's own name first.

    Returns:
        Ancestor names ending with the root's name, or an empty list when the
        node is not found.
    """
    path = find_path(forest, node_id)
    if not path:
        return []
    if not include_self:
        path = path[:-1]
    return [node.name for node in reversed(path)]


def filter_forest(
    forest: List[TreeNode],
    accept_node_fn: Callable[[TreeNode], bool],
) -> List[TreeNode]:
    """Keep the accepted nodes together with all of their ancestors.

    Accepted nodes keep only their filtered descendants; non-accepted
    branches without accepted descendants are dropped. Returns new nodes;
    extra dictionaries are shallow-copied.
    """
    kept_roots: List[TreeNode] = []
    # Post-order: a node is decided after all of its children.
    stack: List[tuple[TreeNode, List[TreeNode], bool]] = [
        (root, kept_roots, False) for root in reversed(forest)
    ]
    pending: List[List[TreeNode]] = []
    while stack:
        node, kept_siblings, expanded = stack.pop()
        if not expanded:
            pending.append([])
            stack.append((node, kept_siblings, True))
            kept_children = pending[-1]
            stack.extend((child, kept_children, False) for child in reversed(node.children))
            continue
        kept_children = pending.pop()
        if kept_children or accept_node_fn(node):
            kept_siblings.append(
                TreeNode(
                    id=node.id,
                    parent_id=node.parent_id,
                    name=node.name,
                    weight=node.weight,
                    extra=dict(node.extra),
                    children=kept_children,
                )
            )
    return kept_roots


def forest_to_dicts(
    forest: List[TreeNode],
    config: TreeNodeConfig | None = None,
) -> List[Dict[str, Any]]:
    """Convert every tree to nested dictionaries (see ``TreeNode.to_dict``).

    Raises:
        SerializationError: If a tree cannot be converted; the error context
            carries the position of the failing root.
    """
    return serialize_list(forest, config)
