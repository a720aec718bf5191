"""Field access for flat input records.

The builder reads records through the ``Record`` protocol: a ``get`` method
for single fields and ``keys`` for the full field list. Every ``Mapping``
(including ``dict``) already satisfies it; ``ObjectRecord`` adapts plain
objects such as dataclass instances or ORM rows.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Record(Protocol):
    """Read-only, key-addressable view of one flat record."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default when absent."""
        ...

    def keys(self) -> Iterable[str]:
        """Return the record's field names in their natural order."""
        ...


class ObjectRecord:
    """Expose an object's attributes through the ``Record`` protocol.

    Fields are the object's instance attributes (``vars(obj)``) in definition
    order, skipping names that start with an underscore (``get`` still reads
    them, so a configured key such as ``"_id"`` works). Objects using
    ``__slots__`` are read through their slot names.

    Example:
        ```python
        @dataclass
        class Menu:
            id: int
            parentId: int
            name: str

        record = ObjectRecord(Menu(2, 1, "Settings"))
        record.get("name")   # "Settings"
        list(record.keys())  # ["id", "parentId", "name"]
        ```
    """

    def __init__(self, obj: Any):
        self._obj = obj

    def __repr__(self) -> str:
        return f"ObjectRecord({self._obj!r})"

    @property
    def obj(self) -> Any:
        """The wrapped object."""
        return self._obj

    def get(self, key: str, default: Any = None) -> Any:
        # private names are left out of keys() but stay readable, e.g. "_id"
        return getattr(self._obj, key, default)

    def keys(self) -> list[str]:
        try:
            names = list(vars(self._obj))
        except TypeError:
            names = []
            for klass in type(self._obj).__mro__:
                slots = getattr(klass, "__slots__", ())
                if isinstance(slots, str):
                    slots = (slots,)
                names.extend(slot for slot in slots if hasattr(self._obj, slot))
        return [name for name in names if not name.startswith("_")]


def as_record(item: Any) -> Record:
    """Return item as a ``Record``.

    Mappings and objects already providing ``get``/``keys`` are returned
    unchanged; anything else is wrapped in an ``ObjectRecord``.
    """
    if isinstance(item, (Mapping, Record)):
        return item
    return ObjectRecord(item)
