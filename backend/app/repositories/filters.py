"""Query construction for property reads.

Every read path builds its statement through :func:`active_properties`, so the
soft-delete rule lives in exactly one place. Search criteria become SQLAlchemy
expressions whose values are sent as bound parameters, never as SQL text.
"""

from sqlalchemy import ColumnElement, Select, and_, false, select

from app.models.property import Property, PropertyImage
from app.schemas.property import PropertySearch

# Image columns are labelled so they cannot collide with property columns in
# the flat joined row.
IMAGE_COLUMNS = (
    PropertyImage.id.label("image_id"),
    PropertyImage.property_id.label("image_property_id"),
    PropertyImage.url.label("image_url"),
    PropertyImage.alt_text.label("image_alt_text"),
    PropertyImage.sort_order.label("image_sort_order"),
    PropertyImage.created_at.label("image_created_at"),
)


def active_properties() -> ColumnElement[bool]:
    """Predicate excluding soft-deleted properties."""
    return Property.is_deleted == false()


def build_property_filter(criteria: PropertySearch | None = None) -> ColumnElement[bool]:
    """Compose the search predicate for ``criteria``.

    The result always includes the soft-delete rule. Unset criteria add
    nothing. City and district use case-insensitive substring matching with
    ``%`` and ``_`` escaped, so user input is matched literally.
    """
    clauses = [active_properties()]
    if criteria is None:
        return and_(*clauses)

    if criteria.city is not None:
        clauses.append(Property.city.icontains(criteria.city, autoescape=True))
    if criteria.district is not None:
        clauses.append(Property.district.icontains(criteria.district, autoescape=True))
    if criteria.property_type is not None:
        clauses.append(Property.type_id == int(criteria.property_type))
    if criteria.status is not None:
        clauses.append(Property.status_id == int(criteria.status))
    if criteria.min_price is not None:
        clauses.append(Property.price >= criteria.min_price)
    if criteria.max_price is not None:
        clauses.append(Property.price <= criteria.max_price)

    return and_(*clauses)


def property_feed(criteria: PropertySearch | None = None, *extra: ColumnElement[bool]) -> Select:
    """Left-join properties to their images, newest property first.

    Produces one row per image, or a single row with null image columns for a
    property without images. Images of one property come out ordered by
    ``sort_order`` and then by insertion.
    """
    return (
        select(*Property.__table__.columns, *IMAGE_COLUMNS)
        .select_from(Property)
        .outerjoin(PropertyImage, PropertyImage.property_id == Property.id)
        .where(build_property_filter(criteria), *extra)
        .order_by(
            Property.created_at.desc(),
            Property.id.desc(),
            PropertyImage.sort_order,
            PropertyImage.id,
        )
    )


def property_by_id(property_id: int) -> Select:
    """Joined read of a single non-deleted property."""
    return property_feed(None, Property.id == property_id)


def property_exists(property_id: int) -> Select:
    """Select the id of a non-deleted property, if any."""
    return select(Property.id).where(build_property_filter(), Property.id == property_id).limit(1)
