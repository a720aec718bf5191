"""Tree node produced by list-to-tree assembly.

A ``TreeNode`` owns its children outright: there are no parent back
references, so a node (or a whole forest) can be copied, compared and
serialized without worrying about cycles.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Dict, List

from forestry_structures.config import TreeNodeConfig


@dataclass
class TreeNode:
    """One node of an assembled forest.

    Attributes:
        id: The record's identifier.
        parent_id: The record's parent identifier (None when the record had none).
        name: The record's display name, or None.
        weight: The raw weight value used for sibling ordering, or None.
        extra: Every other record field, in record order.
        children: Child nodes, ordered by weight.
    """

    id: Any
    parent_id: Any = None
    name: Any = None
    weight: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)
    children: List[TreeNode] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"TreeNode(id={self.id!r}, name={self.name!r}, "
            f"weight={self.weight!r}, children={len(self.children)})"
        )

    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def num_children(self) -> int:
        return len(self.children)

    @property
    def height(self) -> int:
        """Number of levels below this node (0 for a leaf)."""
        height = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            height = max(height, level)
            stack.extend((child, level + 1) for child in node.children)
        return height

    def walk(self) -> Iterator[TreeNode]:
        """Iterate over this node and its descendants in depth-first pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: Any) -> TreeNode | None:
        """Find the first node in this subtree whose id equals node_id."""
        return self.find_first(lambda node: node.id == node_id)

    def find_first(self, accept_node_fn: Callable[[TreeNode], bool]) -> TreeNode | None:
        """Find the first node in pre-order accepted by accept_node_fn."""
        for node in self.walk():
            if accept_node_fn(node):
                return node
        return None

    def to_dict(self, config: TreeNodeConfig | None = None) -> Dict[str, Any]:
        """Convert this subtree to nested dictionaries.

        Keys come from the config (defaults when None). The weight is written
        only when present and the children list only when non-empty. Extra
        fields whose names match one of the configured keys are left out.

        Args:
            config: Supplies the id, parent id, name, weight and children keys.

        Returns:
            A nested dictionary ready for JSON encoding.
        """
        config = config if config is not None else TreeNodeConfig()
        reserved = set(config.key_names)

        root_dict: Dict[str, Any] = {}
        stack: List[tuple[TreeNode, Dict[str, Any]]] = [(self, root_dict)]
        while stack:
            node, out = stack.pop()
            out[config.id_key] = node.id
            out[config.parent_id_key] = node.parent_id
            out[config.name_key] = node.name
            if node.weight is not None:
                out[config.weight_key] = node.weight
            for key, value in node.extra.items():
                if key not in reserved:
                    out[key] = value
            if node.children:
                child_dicts: List[Dict[str, Any]] = [{} for _ in node.children]
                out[config.children_key] = child_dicts
                stack.extend(zip(node.children, child_dicts))
        return root_dict
