"""Property catalog API routes."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_property_service
from app.schemas.property import (
    PropertyCreate,
    PropertyListResponse,
    PropertyRead,
    PropertyUpdate,
)
from app.services.property_service import PropertyService

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Property not found",
    )


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List or search properties",
)
async def list_properties(
    city: str | None = Query(None, max_length=100),
    district: str | None = Query(None, max_length=100),
    property_type: int | None = Query(None, description="PropertyType code"),
    status_filter: int | None = Query(None, alias="status", description="PropertyStatus code"),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    service: PropertyService = Depends(get_property_service),
) -> PropertyListResponse:
    """Return non-deleted properties, newest first, filtered by any given criteria."""
    items = await service.search_properties(
        city=city,
        district=district,
        property_type=property_type,
        status=status_filter,
        min_price=min_price,
        max_price=max_price,
    )
    return PropertyListResponse(items=items, total=len(items))


@router.get(
    "/{property_id}",
    response_model=PropertyRead,
    summary="Get a property by ID",
)
async def get_property(
    property_id: int,
    service: PropertyService = Depends(get_property_service),
) -> PropertyRead:
    prop = await service.get_property_by_id(property_id)
    if prop is None:
        raise _not_found()
    return prop


@router.post(
    "",
    response_model=PropertyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new property",
)
async def create_property(
    body: PropertyCreate,
    service: PropertyService = Depends(get_property_service),
) -> PropertyRead:
    """Create a property and its images in one step."""
    return await service.create_property(body)


@router.put(
    "/{property_id}",
    response_model=PropertyRead,
    summary="Update a property",
)
async def update_property(
    property_id: int,
    body: PropertyUpdate,
    service: PropertyService = Depends(get_property_service),
) -> PropertyRead:
    """Replace a property's fields and, if ``images`` is given, its whole image set."""
    if body.id != property_id:
        raise _not_found()
    # PropertyNotFoundError is turned into a 404 by the app-level handler.
    return await service.update_property(body)


@router.delete(
    "/{property_id}",
    summary="Delete a property",
)
async def delete_property(
    property_id: int,
    service: PropertyService = Depends(get_property_service),
) -> dict[str, str]:
    """Soft-delete a property; its images stay stored but are no longer served."""
    if not await service.delete_property(property_id):
        raise _not_found()
    return {"message": "Property deleted"}
