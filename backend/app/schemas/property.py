"""Pydantic v2 schemas for the property aggregate and its search criteria."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.property import PropertyStatus, PropertyType

# Integer columns are 32-bit on PostgreSQL
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# ---------------------------------------------------------------------------
# Input schemas
# ---------------------------------------------------------------------------


class ImageCreate(BaseModel):
    """An image supplied with a create or update call."""

    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., min_length=1, max_length=500)
    alt_text: str | None = Field(None, max_length=200)
    sort_order: int = Field(0, ge=INT32_MIN, le=INT32_MAX)


class PropertyBase(BaseModel):
    """Business fields shared by create and update.

    Timestamps and the soft-delete flag are not accepted here; the store owns
    them.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    district: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    bedrooms: int = Field(..., ge=1, le=INT32_MAX)
    bathrooms: int = Field(..., ge=1, le=INT32_MAX)
    area: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    property_type: PropertyType
    status: PropertyStatus


class PropertyCreate(PropertyBase):
    """Schema for creating a property together with its images."""

    images: list[ImageCreate] = Field(default_factory=list)


class PropertyUpdate(PropertyBase):
    """Schema for updating a property.

    ``images=None`` keeps the stored images; any list, including an empty one,
    replaces the whole collection.
    """

    id: int
    images: list[ImageCreate] | None = None


class PropertySearch(BaseModel):
    """Optional search criteria. Every unset criterion matches everything."""

    model_config = ConfigDict(extra="forbid")

    city: str | None = Field(None, max_length=100)
    district: str | None = Field(None, max_length=100)
    property_type: PropertyType | None = None
    status: PropertyStatus | None = None
    min_price: Decimal | None = Field(None, ge=0, max_digits=14, decimal_places=2)
    max_price: Decimal | None = Field(None, ge=0, max_digits=14, decimal_places=2)

    @field_validator("city", "district", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


# ---------------------------------------------------------------------------
# Aggregate (read) schemas
# ---------------------------------------------------------------------------


class ImageRead(BaseModel):
    """A stored image."""

    id: int
    property_id: int
    url: str
    alt_text: str | None = None
    sort_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyRead(BaseModel):
    """A property with its fully loaded, ordered list of images."""

    id: int
    title: str
    description: str
    address: str
    city: str
    district: str
    price: Decimal
    bedrooms: int
    bathrooms: int
    area: Decimal
    property_type: PropertyType
    status: PropertyStatus
    created_at: datetime
    updated_at: datetime
    is_deleted: bool = False
    images: list[ImageRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class PropertyListResponse(BaseModel):
    """List of properties."""

    items: list[PropertyRead]
    total: int
