"""Field-name configuration for list-to-tree assembly.

A ``TreeNodeConfig`` tells the builder which record fields hold the node id,
the parent id, the display name and the sort weight, which key nested children
are written under when a node is converted to a dictionary, and optionally how
deep the output tree may go.

Typical usage example:

    ```python
    from forestry_structures import TreeNodeConfig

    config = (
        TreeNodeConfig()
        .set_id_key("menu_id")
        .set_parent_id_key("parent_menu_id")
        .set_weight_key("sort")
        .set_max_depth(2)
    )

    # Or from a settings dictionary
    config = TreeNodeConfig.from_dict({"id_key": "menu_id", "max_depth": 2})
    ```
"""

from __future__ import annotations

from typing import Any, Dict

from forestry_common.exceptions import ConfigurationError

DEFAULT_ID_KEY = "id"
DEFAULT_PARENT_ID_KEY = "parentId"
DEFAULT_NAME_KEY = "name"
DEFAULT_WEIGHT_KEY = "weight"
DEFAULT_CHILDREN_KEY = "children"

_KEY_FIELDS = ("id_key", "parent_id_key", "name_key", "weight_key", "children_key")


class TreeNodeConfig:
    """Field-name mappings and depth limit used by a tree build.

    Setters return the config itself so they can be chained. Each setter
    checks the type of its own argument only; cross-field consistency (empty
    or colliding key names) is reported by the builder.

    A config is never modified by a build and can be shared across any number
    of builds.

    Attributes:
        id_key: Record field holding the node identifier.
        parent_id_key: Record field holding the parent identifier.
        name_key: Record field holding the display name.
        weight_key: Record field holding the sibling sort weight.
        children_key: Key for the nested children list in dictionary output.
        max_depth: Deepest level kept in the output (roots are level 0), or
            None for no limit.
    """

    def __init__(
        self,
        id_key: str = DEFAULT_ID_KEY,
        parent_id_key: str = DEFAULT_PARENT_ID_KEY,
        name_key: str = DEFAULT_NAME_KEY,
        weight_key: str = DEFAULT_WEIGHT_KEY,
        children_key: str = DEFAULT_CHILDREN_KEY,
        max_depth: int | None = None,
    ):
        self._id_key = DEFAULT_ID_KEY
        self._parent_id_key = DEFAULT_PARENT_ID_KEY
        self._name_key = DEFAULT_NAME_KEY
        self._weight_key = DEFAULT_WEIGHT_KEY
        self._children_key = DEFAULT_CHILDREN_KEY
        self._max_depth: int | None = None

        self.set_id_key(id_key)
        self.set_parent_id_key(parent_id_key)
        self.set_name_key(name_key)
        self.set_weight_key(weight_key)
        self.set_children_key(children_key)
        self.set_max_depth(max_depth)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.to_dict().items())
        return f"TreeNodeConfig({fields})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeNodeConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def id_key(self) -> str:
        return self._id_key

    @property
    def parent_id_key(self) -> str:
        return self._parent_id_key

    @property
    def name_key(self) -> str:
        return self._name_key

    @property
    def weight_key(self) -> str:
        return self._weight_key

    @property
    def children_key(self) -> str:
        return self._children_key

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    @property
    def key_names(self) -> tuple[str, str, str, str, str]:
        """The five configured field names, in id/parent/name/weight/children order."""
        return (
            self._id_key,
            self._parent_id_key,
            self._name_key,
            self._weight_key,
            self._children_key,
        )

    def get_deep(self) -> int | None:
        """Get the configured maximum depth.

        Returns:
            The maximum depth (0 keeps only roots), or None when unlimited.
        """
        return self._max_depth

    def set_id_key(self, id_key: str) -> TreeNodeConfig:
        self._id_key = _check_key("id_key", id_key)
        return self

    def set_parent_id_key(self, parent_id_key: str) -> TreeNodeConfig:
        self._parent_id_key = _check_key("parent_id_key", parent_id_key)
        return self

    def set_name_key(self, name_key: str) -> TreeNodeConfig:
        self._name_key = _check_key("name_key", name_key)
        return self

    def set_weight_key(self, weight_key: str) -> TreeNodeConfig:
        self._weight_key = _check_key("weight_key", weight_key)
        return self

    def set_children_key(self, children_key: str) -> TreeNodeConfig:
        self._children_key = _check_key("children_key", children_key)
        return self

    def set_max_depth(self, max_depth: int | None) -> TreeNodeConfig:
        """Set the maximum output depth.

        Args:
            max_depth: Non-negative depth, or None to remove the limit.

        Raises:
            TypeError: If max_depth is not an int (bool is rejected).
            ValueError: If max_depth is negative.
        """
        if max_depth is not None:
            if isinstance(max_depth, bool) or not isinstance(max_depth, int):
                raise TypeError(
                    f"max_depth must be an int or None, got {type(max_depth).__name__}"
                )
            if max_depth < 0:
                raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self._max_depth = max_depth
        return self

    def copy(self) -> TreeNodeConfig:
        """Return an independent copy of this config."""
        return TreeNodeConfig(**self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary with snake_case keys."""
        return {
            "id_key": self._id_key,
            "parent_id_key": self._parent_id_key,
            "name_key": self._name_key,
            "weight_key": self._weight_key,
            "children_key": self._children_key,
            "max_depth": self._max_depth,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TreeNodeConfig:
        """Create a config from a settings dictionary.

        Missing entries keep their defaults.

        Args:
            data: Mapping using the keys produced by ``to_dict``.

        Returns:
            A new TreeNodeConfig.

        Raises:
            ConfigurationError: If the dictionary holds unknown keys or a
                value of the wrong type.
        """
        allowed = (*_KEY_FIELDS, "max_depth")
        unknown = [key for key in data if key not in allowed]
        if unknown:
            raise ConfigurationError(
                f"Unknown tree config keys: {', '.join(map(str, unknown))}",
                context={"unknown": unknown, "allowed": list(allowed)},
            )
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid tree config: {e}",
                context={"data": dict(data)},
            ) from e


def _check_key(field_name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a str, got {type(value).__name__}")
    return value
