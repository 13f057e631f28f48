"""Rebuild property aggregates from flat property ⟕ image rows."""

from collections.abc import Iterable, Mapping
from typing import Any

from app.models.property import PropertyStatus, PropertyType
from app.schemas.property import ImageRead, PropertyRead


def _property_from_row(row: Mapping[str, Any]) -> PropertyRead:
    return PropertyRead(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        address=row["address"],
        city=row["city"],
        district=row["district"],
        price=row["price"],
        bedrooms=row["bedrooms"],
        bathrooms=row["bathrooms"],
        area=row["area"],
        property_type=PropertyType(row["type_id"]),
        status=PropertyStatus(row["status_id"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        is_deleted=row["is_deleted"],
        images=[],
    )


def _image_from_row(row: Mapping[str, Any]) -> ImageRead:
    return ImageRead(
        id=row["image_id"],
        property_id=row["image_property_id"],
        url=row["image_url"],
        alt_text=row["image_alt_text"],
        sort_order=row["image_sort_order"],
        created_at=row["image_created_at"],
    )


def map_property_rows(rows: Iterable[Mapping[str, Any]]) -> list[PropertyRead]:
    """Group joined rows into one aggregate per property.

    Output order is the order in which each property id is first seen, and
    each aggregate's images keep row order. A row whose ``image_id`` is null
    contributes the property only, so a property without images comes back
    with an empty list.
    """
    aggregates: dict[int, PropertyRead] = {}
    for row in rows:
        aggregate = aggregates.get(row["id"])
        if aggregate is None:
            aggregate = _property_from_row(row)
            aggregates[aggregate.id] = aggregate
        if row["image_id"] is not None:
            aggregate.images.append(_image_from_row(row))
    return list(aggregates.values())


def map_single_property(rows: Iterable[Mapping[str, Any]]) -> PropertyRead | None:
    """Like :func:`map_property_rows` for a feed holding at most one property."""
    aggregates = map_property_rows(rows)
    return aggregates[0] if aggregates else None
