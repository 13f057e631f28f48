"""Persistence layer for the property aggregate."""

from app.repositories.property_repository import AbstractPropertyRepository, PropertyRepository
from app.repositories.property_store import PropertyStore

__all__ = [
    "AbstractPropertyRepository",
    "PropertyRepository",
    "PropertyStore",
]
