"""SQLAlchemy models for the property catalog.

All models are imported here so that ``Base.metadata.create_all`` can discover
them. If you add a new model, import it in this file.
"""

from app.models.property import Property, PropertyImage, PropertyStatus, PropertyType

__all__ = [
    "Property",
    "PropertyImage",
    "PropertyStatus",
    "PropertyType",
]
