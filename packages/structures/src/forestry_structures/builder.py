"""Assemble flat parent-linked records into an ordered forest.

Records only need an identifier and a parent identifier; the builder groups
them by parent, orders every sibling group by weight and nests the groups into
``TreeNode`` instances starting from the records whose parent equals the
requested root value.

Malformed input never stops a build:

- Records that no chain of parents links to the root (orphans, including
  disconnected cycles) are left out.
- A record is placed at most once, so parent links that loop back to an
  already placed record (cycles) are cut there.
- When several records share an identifier, the last one wins.
- Records without an identifier are ignored.

Only unusable arguments (no records, no config, unhashable identifiers) raise
``InvalidInputError``, and they do so before any node is created.

Typical usage example:

    ```python
    from forestry_structures import TreeNodeConfig, build

    records = [
        {"id": 1, "parentId": 0, "name": "root", "weight": 0},
        {"id": 2, "parentId": 1, "name": "a", "weight": 2},
        {"id": 3, "parentId": 1, "name": "b", "weight": 1},
    ]
    forest = build(records, 0, TreeNodeConfig())
    [child.name for child in forest[0].children]  # ["b", "a"]
    ```
"""

from __future__ import annotations

import logging
import numbers
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Deque, Dict, List, Tuple

from forestry_structures.config import TreeNodeConfig
from forestry_structures.exceptions import InvalidInputError
from forestry_structures.node import TreeNode
from forestry_structures.record import Record, as_record

logger = logging.getLogger(__name__)

NodeParser = Callable[[Any, TreeNodeConfig], Record]

_NO_WEIGHT: Tuple[int, Any] = (1, 0)


def weight_sort_key(weight: Any) -> Tuple[int, Any]:
    """Sort key placing numeric weights in ascending order, others last.

    Real numbers (ints, floats, Decimals, Fractions) are compared as they are,
    so large ints and precise Decimals keep their exact order; numeric strings
    are read as Decimals. None, booleans, NaN and non-numeric values sort
    after every numeric weight; a stable sort keeps their input order.
    """
    if weight is None or isinstance(weight, bool):
        return _NO_WEIGHT
    if isinstance(weight, str):
        try:
            weight = Decimal(weight.strip())
        except InvalidOperation:
            return _NO_WEIGHT
    if isinstance(weight, Decimal):
        return _NO_WEIGHT if weight.is_nan() else (0, weight)
    if isinstance(weight, numbers.Real):
        # NaN is the only value unequal to itself
        return _NO_WEIGHT if weight != weight else (0, weight)
    return _NO_WEIGHT


class TreeBuilder:
    """Builds forests from flat records using one configuration.

    The builder holds no per-build state, so one instance can serve any
    number of builds, including concurrent ones.

    Args:
        config: Field names and depth limit to use.
        node_parser: Optional callable turning each input item into a
            ``Record``; defaults to ``as_record``.

    Raises:
        InvalidInputError: If config is None.
    """

    def __init__(
        self,
        config: TreeNodeConfig,
        node_parser: NodeParser | None = None,
    ):
        if config is None:
            raise InvalidInputError(
                "A tree config is required",
                context={"argument": "config"},
            )
        self._config = config
        self._node_parser = node_parser

    @property
    def config(self) -> TreeNodeConfig:
        return self._config

    def build(self, records: Iterable[Any], root_parent_value: Any = None) -> List[TreeNode]:
        """Build the forest of records hanging from root_parent_value.

        Args:
            records: Flat records (mappings, ``Record`` objects, or anything
                the node parser understands). Consumed once.
            root_parent_value: Parent id marking top-level records.

        Returns:
            The root nodes, ordered by weight, each holding its ordered
            children.

        Raises:
            InvalidInputError: If records is None or not a sequence of
                records, or an identifier cannot be hashed.
        """
        if records is None:
            raise InvalidInputError(
                "Records are required",
                context={"argument": "records"},
            )
        if isinstance(records, (str, bytes, Mapping)):
            raise InvalidInputError(
                f"Records must be an iterable of records, got {type(records).__name__}",
                context={"argument": "records", "type": type(records).__name__},
            )
        _check_hashable(root_parent_value, "root_parent_value")

        self._check_key_names()
        by_id, skipped_no_id, duplicates = self._index_records(records)
        children_of = self._group_by_parent(by_id)

        forest, emitted, below_depth, cycle_skipped = self._assemble(
            children_of, root_parent_value
        )
        # anything neither emitted nor hidden by the depth limit is unreachable
        orphans = len(by_id) - emitted - below_depth

        logger.debug(
            "Built forest under %r: %d records, %d roots, %d nodes, %d below depth limit, "
            "%d orphans, %d cycle links cut, %d duplicate ids, %d records without id",
            root_parent_value,
            len(by_id),
            len(forest),
            emitted,
            below_depth,
            orphans,
            cycle_skipped,
            duplicates,
            skipped_no_id,
        )
        return forest

    def build_single(self, records: Iterable[Any], root_parent_value: Any = None) -> TreeNode:
        """Build the forest and hang it under a synthetic root node.

        The synthetic node's id is root_parent_value; it has no name, weight
        or extra fields and does not count as a level for the depth limit.
        """
        forest = self.build(records, root_parent_value)
        return TreeNode(id=root_parent_value, children=forest)

    def _check_key_names(self) -> None:
        keys = self._config.key_names
        if any(not key for key in keys):
            logger.warning("Tree config has empty key names: %r", self._config)
        elif len(set(keys)) != len(keys):
            logger.warning("Tree config key names are not distinct: %r", self._config)

    def _index_records(self, records: Iterable[Any]) -> Tuple[Dict[Any, Record], int, int]:
        id_key = self._config.id_key
        by_id: Dict[Any, Record] = {}
        skipped_no_id = 0
        duplicates = 0

        for position, item in enumerate(records):
            record = (
                self._node_parser(item, self._config)
                if self._node_parser is not None
                else as_record(item)
            )
            node_id = record.get(id_key)
            if node_id is None:
                skipped_no_id += 1
                logger.debug("Skipping record %d without %r", position, id_key)
                continue
            _check_hashable(node_id, id_key, position)
            if node_id in by_id:
                duplicates += 1
                logger.debug("Record %d replaces earlier record with id %r", position, node_id)
                # re-insert so the survivor keeps its own input position
                del by_id[node_id]
            by_id[node_id] = record

        return by_id, skipped_no_id, duplicates

    def _group_by_parent(self, by_id: Dict[Any, Record]) -> Dict[Any, List[Record]]:
        parent_id_key = self._config.parent_id_key
        weight_key = self._config.weight_key

        children_of: Dict[Any, List[Record]] = {}
        for record in by_id.values():
            parent_id = record.get(parent_id_key)
            _check_hashable(parent_id, parent_id_key)
            children_of.setdefault(parent_id, []).append(record)

        for parent_id, group in children_of.items():
            if len(group) > 1:
                children_of[parent_id] = sorted(
                    group, key=lambda record: weight_sort_key(record.get(weight_key))
                )
        return children_of

    def _assemble(
        self,
        children_of: Dict[Any, List[Record]],
        root_parent_value: Any,
    ) -> Tuple[List[TreeNode], int, int, int]:
        id_key = self._config.id_key
        max_depth = self._config.max_depth

        # ids either placed in the output or reached below the depth limit
        seen: set = set()
        cycle_skipped = 0

        def attach(group: List[Record], siblings: List[TreeNode], depth: int) -> None:
            nonlocal cycle_skipped
            for record in group:
                node_id = record.get(id_key)
                if node_id in seen:
                    cycle_skipped += 1
                    logger.debug("Not attaching %r again at depth %d", node_id, depth)
                    continue
                seen.add(node_id)
                node = self._make_node(record)
                siblings.append(node)
                queue.append((node, depth))

        forest: List[TreeNode] = []
        queue: Deque[Tuple[TreeNode, int]] = deque()
        attach(children_of.get(root_parent_value, []), forest, 0)

        hidden: List[Any] = []
        while queue:
            node, depth = queue.popleft()
            group = children_of.get(node.id)
            if not group:
                continue
            if max_depth is not None and depth >= max_depth:
                hidden.append(node.id)
            else:
                attach(group, node.children, depth + 1)
        emitted = len(seen)

        # count the records cut off by the depth limit without building nodes
        while hidden:
            for record in children_of.get(hidden.pop(), ()):
                node_id = record.get(id_key)
                if node_id not in seen:
                    seen.add(node_id)
                    hidden.append(node_id)

        return forest, emitted, len(seen) - emitted, cycle_skipped

    def _make_node(self, record: Record) -> TreeNode:
        config = self._config
        consumed = (config.id_key, config.parent_id_key, config.name_key, config.weight_key)
        return TreeNode(
            id=record.get(config.id_key),
            parent_id=record.get(config.parent_id_key),
            name=record.get(config.name_key),
            weight=record.get(config.weight_key),
            extra={key: record.get(key) for key in record.keys() if key not in consumed},
        )


def build(
    records: Iterable[Any],
    root_parent_value: Any,
    config: TreeNodeConfig,
    *,
    node_parser: NodeParser | None = None,
) -> List[TreeNode]:
    """Build an ordered forest from flat records.

    Args:
        records: Flat records carrying an id and a parent id.
        root_parent_value: Parent id marking top-level records (often None or 0).
        config: Field names and depth limit.
        node_parser: Optional callable turning each item into a ``Record``.

    Returns:
        The ordered list of root nodes.

    Raises:
        InvalidInputError: If records or config is None.
    """
    return TreeBuilder(config, node_parser=node_parser).build(records, root_parent_value)


def build_single(
    records: Iterable[Any],
    root_parent_value: Any,
    config: TreeNodeConfig,
    *,
    node_parser: NodeParser | None = None,
) -> TreeNode:
    """Build the forest under a synthetic node whose id is root_parent_value."""
    return TreeBuilder(config, node_parser=node_parser).build_single(
        records, root_parent_value
    )


def _check_hashable(value: Any, field_name: str, position: int | None = None) -> None:
    try:
        hash(value)
    except TypeError as e:
        context: Dict[str, Any] = {"field": field_name, "type": type(value).__name__}
        if position is not None:
            context["position"] = position
        raise InvalidInputError(
            f"Identifier in {field_name!r} is not hashable: {value!r}",
            context=context,
        ) from e
