"""Shared API dependencies — single import point for all routers.

Wires the property service on top of the module-level session factory so
router modules can depend on it directly::

    from app.api.deps import get_property_service
"""

from app.database import async_session_factory
from app.repositories.property_repository import PropertyRepository
from app.repositories.property_store import PropertyStore
from app.services.property_service import PropertyService

_property_service = PropertyService(PropertyRepository(PropertyStore(async_session_factory)))


def get_property_service() -> PropertyService:
    """Return the property service (override in tests via dependency_overrides)."""
    return _property_service


__all__ = ["get_property_service"]
