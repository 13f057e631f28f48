"""Property service — the operations the web layer calls."""

import logging
from decimal import Decimal

from pydantic import ValidationError

from app.exceptions import PropertyNotFoundError, PropertyValidationError
from app.models.property import PropertyStatus, PropertyType
from app.repositories.property_repository import AbstractPropertyRepository
from app.schemas.property import PropertyCreate, PropertyRead, PropertySearch, PropertyUpdate

logger = logging.getLogger(__name__)


class PropertyService:
    """Application-facing property operations over a repository.

    Timestamps are never set here; the store stamps them.
    """

    def __init__(self, repository: AbstractPropertyRepository) -> None:
        self._repository = repository

    async def get_all_properties(self) -> list[PropertyRead]:
        return await self._repository.get_all()

    async def get_property_by_id(self, property_id: int) -> PropertyRead | None:
        if property_id <= 0:
            return None
        return await self._repository.get_by_id(property_id)

    async def search_properties(
        self,
        city: str | None = None,
        district: str | None = None,
        property_type: PropertyType | int | None = None,
        status: PropertyStatus | int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> list[PropertyRead]:
        """Search by any combination of criteria; omitted ones match all.

        Raises :class:`PropertyValidationError` for malformed criteria such as
        an unknown type code or a negative price.
        """
        try:
            criteria = PropertySearch(
                city=city,
                district=district,
                property_type=property_type,
                status=status,
                min_price=min_price,
                max_price=max_price,
            )
        except ValidationError as exc:
            raise PropertyValidationError(exc.errors(include_url=False, include_context=False)) from exc
        return await self._repository.search(criteria)

    async def create_property(self, data: PropertyCreate) -> PropertyRead:
        if data is None:
            raise TypeError("property must not be None")
        created = await self._repository.create(data)
        logger.info("Property %s created: %s", created.id, created.title)
        return created

    async def update_property(self, data: PropertyUpdate) -> PropertyRead:
        if data is None:
            raise TypeError("property must not be None")
        if not await self.property_exists(data.id):
            raise PropertyNotFoundError(data.id)
        return await self._repository.update(data)

    async def delete_property(self, property_id: int) -> bool:
        if property_id <= 0:
            return False
        return await self._repository.delete(property_id)

    async def property_exists(self, property_id: int) -> bool:
        if property_id <= 0:
            return False
        return await self._repository.exists(property_id)
