"""Exceptions for the structures package, built on forestry_common."""

from forestry_common.exceptions import ValidationError


class InvalidInputError(ValidationError):
    """Raised when a tree build receives unusable records or configuration."""

    pass


__all__ = ["InvalidInputError"]
