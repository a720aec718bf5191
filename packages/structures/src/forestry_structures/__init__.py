"""List-to-tree assembly for flat, parent-linked records.

The forestry-structures package turns flat records (database rows, JSON
arrays, DataFrame rows, plain objects) that each carry an id and a parent id
into an ordered forest of nested nodes.

## Modules

### config - Field naming
``TreeNodeConfig`` maps the id, parent id, name, weight and children fields
to the names your records use, and optionally limits the output depth.

### builder - Assembly
``build``/``build_single`` (or a reusable ``TreeBuilder``) group records by
parent, order siblings by weight and nest them. Orphans, cycles and duplicate
ids are tolerated rather than raised.

### node / traversal - Working with the result
``TreeNode`` holds one record's id, name, weight, extra fields and children.
``find_node``, ``find_path``, ``get_parents_names``, ``filter_forest`` and
``forest_to_dicts`` operate on a whole forest.

### sources - Record sources
``records_from_dataframe`` feeds pandas query results into a build.

## Quick Example

```python
from forestry_structures import TreeNodeConfig, build, forest_to_dicts

records = [
    {"id": 1, "parentId": 0, "name": "root", "weight": 0},
    {"id": 2, "parentId": 1, "name": "a", "weight": 2},
    {"id": 3, "parentId": 1, "name": "b", "weight": 1},
]
forest = build(records, 0, TreeNodeConfig())
forest_to_dicts(forest)
# [{"id": 1, "parentId": 0, "name": "root", "weight": 0, "children": [...]}]
```
"""

from forestry_structures.builder import (
    TreeBuilder,
    build,
    build_single,
    weight_sort_key,
)
from forestry_structures.config import TreeNodeConfig
from forestry_structures.exceptions import InvalidInputError
from forestry_structures.node import TreeNode
from forestry_structures.record import ObjectRecord, Record, as_record
from forestry_structures.sources import records_from_dataframe
from forestry_structures.traversal import (
    filter_forest,
    find_node,
    find_path,
    forest_to_dicts,
    get_parents_names,
    walk,
)

__version__ = "1.0.0"

__all__ = [
    "InvalidInputError",
    "ObjectRecord",
    "Record",
    "TreeBuilder",
    "TreeNode",
    "TreeNodeConfig",
    "as_record",
    "build",
    "build_single",
    "filter_forest",
    "find_node",
    "find_path",
    "forest_to_dicts",
    "get_parents_names",
    "records_from_dataframe",
    "walk",
    "weight_sort_key",
]
