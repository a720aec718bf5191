"""Conversion of forestry objects to plain dictionaries.

Tree nodes and configurations expose ``to_dict``; the helpers here call it on
behalf of code that hands the result to a JSON or YAML encoder, and report
any failure as a ``SerializationError`` naming the object involved.

Example:
    ```python
    from forestry_common.serialization import serialize_list

    payload = json.dumps(serialize_list(forest, config))
    ```
"""

from typing import Any, Dict, List

from forestry_common.exceptions import SerializationError


def serialize(obj: Any, *args: Any, **kwargs: Any) -> Dict[str, Any]:
    """Convert obj to a dictionary through its ``to_dict`` method.

    Extra arguments are passed on to ``to_dict`` (a node takes the config
    whose key names it should use).

    Raises:
        SerializationError: If obj has no ``to_dict``, it fails, or it
            returns something other than a dict.
    """
    type_name = type(obj).__name__
    to_dict = getattr(obj, "to_dict", None)
    if to_dict is None:
        raise SerializationError(
            f"{type_name} cannot be serialized (no to_dict method)",
            context={"type": type_name},
        )

    try:
        result = to_dict(*args, **kwargs)
    except Exception as e:
        raise SerializationError(
            f"Failed to serialize {type_name}: {e}",
            context={"type": type_name, "error": str(e)},
        ) from e

    if not isinstance(result, dict):
        raise SerializationError(
            f"{type_name}.to_dict() returned {type(result).__name__}, not a dict",
            context={"type": type_name, "result_type": type(result).__name__},
        )
    return result


def serialize_list(items: List[Any], *args: Any, **kwargs: Any) -> List[Dict[str, Any]]:
    """Serialize every item, adding the failing item's position to the error."""
    result = []
    for index, item in enumerate(items):
        try:
            result.append(serialize(item, *args, **kwargs))
        except SerializationError as e:
            e.context["index"] = index
            raise
    return result


__all__ = [
    "serialize",
    "serialize_list",
]
