"""Common exception hierarchy for all forestry packages.

Every forestry error carries an optional context dictionary so that callers
can log or inspect the values that caused the failure.

Example:
    ```python
    from forestry_common.exceptions import ConfigurationError, ForestryError

    try:
        TreeNodeConfig.from_dict({"idKey": "pk"})
    except ForestryError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```

Package-Specific Extensions:
    ```python
    from forestry_common.exceptions import ValidationError

    class InvalidInputError(ValidationError):
        '''Raised when a build receives unusable arguments.'''
        pass
    ```
"""

from typing import Any, Dict


class ForestryError(Exception):
    """Base exception for all forestry packages.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, IDs, etc.)
        details: Alternative to context (both are supported)

    Example:
        ```python
        error = ForestryError(
            "Build failed",
            context={"argument": "records"}
        )
        str(error)
        # 'Build failed'
        error.context
        # {'argument': 'records'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
            details: Optional details dictionary (takes precedence over context)
        """
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(ForestryError):
    """Raised when input data or arguments fail validation.

    Example:
        ```python
        raise ValidationError(
            "Records must not be None",
            context={"argument": "records"}
        )
        ```
    """

    pass


class ConfigurationError(ForestryError):
    """Raised when configuration is invalid or missing.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown configuration key",
            context={"key": "idKey", "allowed": ["id_key", "parent_id_key"]}
        )
        ```
    """

    pass


class SerializationError(ForestryError):
    """Raised when an object cannot be converted to a dictionary.

    Example:
        ```python
        raise SerializationError(
            "Cannot serialize node",
            context={"type": "TreeNode", "error": "unhashable type"}
        )
        ```
    """

    pass


__all__ = [
    "ForestryError",
    "ValidationError",
    "ConfigurationError",
    "SerializationError",
]
