"""Common utilities and base classes for forestry packages.

- **Exceptions**: Unified exception hierarchy with context support
- **Serialization**: to_dict conversion with SerializationError reporting

Example:
    ```python
    from forestry_common import ForestryError, serialize

    raise ForestryError("Something went wrong", context={"details": "here"})
    ```
"""

from forestry_common.exceptions import (
    ConfigurationError,
    ForestryError,
    SerializationError,
    ValidationError,
)
from forestry_common.serialization import serialize, serialize_list

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ForestryError",
    "ValidationError",
    "ConfigurationError",
    "SerializationError",
    # Serialization
    "serialize",
    "serialize_list",
]
