"""Aggregate store — reads and atomic writes of a property with its images.

Reads are one joined query per call, mapped back into aggregates by
:mod:`app.repositories.row_mapper`. Writes that touch both tables run inside a
single transaction on a single session; any failure rolls the whole call back
and the original exception propagates unchanged. No retries happen here.

Concurrent updates of the same property are last-writer-wins: there is no
version column.
"""

import logging
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, insert, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.exceptions import PropertyNotFoundError, PropertyValidationError
from app.models.property import Property, PropertyImage
from app.repositories.filters import active_properties, property_by_id, property_exists, property_feed
from app.repositories.row_mapper import map_property_rows, map_single_property
from app.schemas.property import ImageCreate, PropertyBase, PropertyCreate, PropertyRead, PropertySearch, PropertyUpdate

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validated(schema: type[SchemaT], data: Any) -> SchemaT:
    """Re-run validation on ``data`` before anything is written.

    Raises ``TypeError`` for ``None`` (a caller bug, not a business error) and
    :class:`PropertyValidationError` for constraint violations, including on
    instances built with ``model_construct``.
    """
    if data is None:
        raise TypeError(f"{schema.__name__} must not be None")
    payload = data.model_dump() if isinstance(data, BaseModel) else data
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise PropertyValidationError(exc.errors(include_url=False, include_context=False)) from exc


def _property_values(data: PropertyBase) -> dict[str, Any]:
    """Column values for the business fields of ``data``."""
    return {
        "title": data.title,
        "description": data.description,
        "address": data.address,
        "city": data.city,
        "district": data.district,
        "price": data.price,
        "bedrooms": data.bedrooms,
        "bathrooms": data.bathrooms,
        "area": data.area,
        "type_id": int(data.property_type),
        "status_id": int(data.status),
    }


class PropertyStore:
    """SQLAlchemy-backed store for the property aggregate.

    Each public method opens its own session from ``session_factory`` and
    never keeps a transaction open past its return.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self) -> list[PropertyRead]:
        """All non-deleted properties, newest first."""
        return await self.search(None)

    async def get_by_id(self, property_id: int) -> PropertyRead | None:
        """The property with ``property_id``, or ``None`` if absent or deleted."""
        async with self._session_factory() as session:
            return await self._load(session, property_id)

    async def search(self, criteria: PropertySearch | None = None) -> list[PropertyRead]:
        """Non-deleted properties matching every set criterion, newest first."""
        async with self._session_factory() as session:
            result = await session.execute(property_feed(criteria))
            return map_property_rows(result.mappings())

    async def exists(self, property_id: int) -> bool:
        async with self._session_factory() as session:
            return await session.scalar(property_exists(property_id)) is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: PropertyCreate) -> PropertyRead:
        """Insert a property and its images in one transaction."""
        data = _validated(PropertyCreate, data)
        now = _utcnow()

        async with self._session_factory() as session:
            try:
                async with session.begin():
                    record = Property(
                        **_property_values(data),
                        created_at=now,
                        updated_at=now,
                        is_deleted=False,
                    )
                    session.add(record)
                    await session.flush()
                    await self._insert_images(session, record.id, data.images, now)
                    created = await self._load(session, record.id)
            except Exception:
                logger.warning("Create of property %r rolled back", data.title)
                raise

        logger.info("Created property %s with %d images", created.id, len(created.images))
        return created

    async def update(self, data: PropertyUpdate) -> PropertyRead:
        """Update business fields and, when given, replace the image set.

        Raises :class:`PropertyNotFoundError` before touching any row when the
        property is absent or soft-deleted, and also when the update matches
        nothing because the property was deleted in between.
        """
        data = _validated(PropertyUpdate, data)
        now = _utcnow()

        async with self._session_factory() as session:
            try:
                async with session.begin():
                    if await session.scalar(property_exists(data.id)) is None:
                        raise PropertyNotFoundError(data.id)

                    result = await session.execute(
                        update(Property)
                        .where(Property.id == data.id, active_properties())
                        .values(**_property_values(data), updated_at=now)
                        .execution_options(synchronize_session=False)
                    )
                    if result.rowcount == 0:
                        raise PropertyNotFoundError(data.id)

                    if data.images is not None:
                        await session.execute(
                            delete(PropertyImage)
                            .where(PropertyImage.property_id == data.id)
                            .execution_options(synchronize_session=False)
                        )
                        await self._insert_images(session, data.id, data.images, now)

                    updated = await self._load(session, data.id)
            except PropertyNotFoundError:
                logger.info("Update skipped: property %s not found", data.id)
                raise
            except Exception:
                logger.warning("Update of property %s rolled back", data.id)
                raise

        logger.info("Updated property %s (%d images)", updated.id, len(updated.images))
        return updated

    async def delete(self, property_id: int) -> bool:
        """Soft-delete a property. Image rows are left untouched.

        Returns ``False`` when no non-deleted property has ``property_id``.
        """
        async with self._session_factory() as session, session.begin():
            result = await session.execute(
                update(Property)
                .where(Property.id == property_id, active_properties())
                .values(is_deleted=True, updated_at=_utcnow())
                .execution_options(synchronize_session=False)
            )
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Soft-deleted property %s", property_id)
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, session: AsyncSession, property_id: int) -> PropertyRead | None:
        result = await session.execute(property_by_id(property_id))
        return map_single_property(result.mappings())

    async def _insert_images(
        self,
        session: AsyncSession,
        property_id: int,
        images: list[ImageCreate],
        now: datetime,
    ) -> None:
        if not images:
            return
        await session.execute(
            insert(PropertyImage),
            [
                {
                    "property_id": property_id,
                    "url": image.url,
                    "alt_text": image.alt_text,
                    "sort_order": image.sort_order,
                    "created_at": now,
                }
                for image in images
            ],
        )
