"""Repository interface over the property store.

Services depend on :class:`AbstractPropertyRepository`; the concrete
:class:`PropertyRepository` forwards to a :class:`PropertyStore` after
rejecting ids that can never exist.
"""

from abc import ABC, abstractmethod

from app.exceptions import PropertyNotFoundError
from app.repositories.property_store import PropertyStore
from app.schemas.property import PropertyCreate, PropertyRead, PropertySearch, PropertyUpdate


class AbstractPropertyRepository(ABC):
    """Capabilities the application layer needs from property storage."""

    @abstractmethod
    async def get_all(self) -> list[PropertyRead]: ...

    @abstractmethod
    async def get_by_id(self, property_id: int) -> PropertyRead | None: ...

    @abstractmethod
    async def search(self, criteria: PropertySearch | None = None) -> list[PropertyRead]: ...

    @abstractmethod
    async def create(self, data: PropertyCreate) -> PropertyRead: ...

    @abstractmethod
    async def update(self, data: PropertyUpdate) -> PropertyRead: ...

    @abstractmethod
    async def delete(self, property_id: int) -> bool: ...

    @abstractmethod
    async def exists(self, property_id: int) -> bool: ...


class PropertyRepository(AbstractPropertyRepository):
    """Pass-through to :class:`PropertyStore`.

    Non-positive ids are answered here as "not found" without a round trip.
    """

    def __init__(self, store: PropertyStore) -> None:
        self._store = store

    async def get_all(self) -> list[PropertyRead]:
        return await self._store.get_all()

    async def get_by_id(self, property_id: int) -> PropertyRead | None:
        if property_id <= 0:
            return None
        return await self._store.get_by_id(property_id)

    async def search(self, criteria: PropertySearch | None = None) -> list[PropertyRead]:
        return await self._store.search(criteria)

    async def create(self, data: PropertyCreate) -> PropertyRead:
        if data is None:
            raise TypeError("property must not be None")
        return await self._store.create(data)

    async def update(self, data: PropertyUpdate) -> PropertyRead:
        if data is None:
            raise TypeError("property must not be None")
        if data.id <= 0:
            raise PropertyNotFoundError(data.id)
        return await self._store.update(data)

    async def delete(self, property_id: int) -> bool:
        if property_id <= 0:
            return False
        return await self._store.delete(property_id)

    async def exists(self, property_id: int) -> bool:
        if property_id <= 0:
            return False
        return await self._store.exists(property_id)
