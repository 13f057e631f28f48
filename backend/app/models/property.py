"""Property and PropertyImage models — listings and their ordered photos."""

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String, false
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class PropertyType(enum.IntEnum):
    """Kind of listing, stored as an integer code in ``properties.type_id``."""

    APARTMENT = 1
    HOUSE = 2
    STUDIO = 3
    TOWNHOUSE = 4
    VILLA = 5
    COMMERCIAL = 6
    LAND = 7


class PropertyStatus(enum.IntEnum):
    """Listing status, stored as an integer code in ``properties.status_id``."""

    FOR_SALE = 1
    FOR_RENT = 2
    SOLD = 3
    RENTED = 4


class Property(Base):
    """A real-estate listing. Soft-deleted rows stay in the table."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    district: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    area: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    type_id: Mapped[int] = mapped_column(Integer, nullable=False)  # PropertyType
    status_id: Mapped[int] = mapped_column(Integer, nullable=False)  # PropertyStatus

    # Stamped by PropertyStore, never by the database or the caller
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        index=True,
    )

    __table_args__ = (Index("ix_properties_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title!r}, city={self.city!r})>"


class PropertyImage(Base):
    """A photo owned by exactly one property.

    No ORM relationship points back to ``Property``; images are only loaded
    as part of the joined aggregate read.
    """

    __tablename__ = "property_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    alt_text: Mapped[str | None] = mapped_column(String(200), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, sort_order={self.sort_order})>"
