"""Errors raised by the property persistence layer."""

from typing import Any


class CatalogError(Exception):
    """Base exception for the property catalog."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PropertyNotFoundError(CatalogError):
    """No non-deleted property exists with the requested id."""

    def __init__(self, property_id: int) -> None:
        self.property_id = property_id
        super().__init__(f"Property with ID {property_id} not found.")


class PropertyValidationError(CatalogError):
    """A field violates a length, range or requiredness constraint."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        fields = ", ".join(".".join(str(part) for part in err.get("loc", ())) for err in errors)
        super().__init__(f"Invalid property data: {fields or 'unknown field'}")
