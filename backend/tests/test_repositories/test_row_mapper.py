"""Tests for rebuilding aggregates from joined rows."""

from datetime import datetime, timezone
from decimal import Decimal

from app.models.property import PropertyStatus, PropertyType
from app.repositories.row_mapper import map_property_rows, map_single_property

_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _row(property_id: int, image_id: int | None = None, sort_order: int = 0) -> dict:
    """Build one flat row as produced by the property/image left join."""
    has_image = image_id is not None
    return {
        "id": property_id,
        "title": f"Unit {property_id}",
        "description": "Bright flat",
        "address": f"{property_id} Main Street",
        "city": "Springfield",
        "district": "North",
        "price": Decimal("250000.00"),
        "bedrooms": 3,
        "bathrooms": 2,
        "area": Decimal("85.50"),
        "type_id": 2,
        "status_id": 2,
        "created_at": _NOW,
        "updated_at": _NOW,
        "is_deleted": False,
        "image_id": image_id,
        "image_property_id": property_id if has_image else None,
        "image_url": f"https://cdn.example.com/{image_id}.jpg" if has_image else None,
        "image_alt_text": None,
        "image_sort_order": sort_order if has_image else None,
        "image_created_at": _NOW if has_image else None,
    }


class TestMapPropertyRows:
    def test_empty_feed(self):
        assert map_property_rows([]) == []

    def test_property_without_images_has_empty_list(self):
        result = map_property_rows([_row(1)])
        assert len(result) == 1
        assert result[0].id == 1
        assert result[0].images == []

    def test_rows_grouped_per_property(self):
        rows = [_row(1, 10), _row(1, 11, 1), _row(1, 12, 2), _row(2, 20)]
        result = map_property_rows(rows)

        assert [p.id for p in result] == [1, 2]
        assert [img.id for img in result[0].images] == [10, 11, 12]
        assert [img.id for img in result[1].images] == [20]

    def test_first_seen_order_is_kept(self):
        rows = [_row(7), _row(3, 30), _row(9, 90), _row(3, 31, 1)]
        result = map_property_rows(rows)
        assert [p.id for p in result] == [7, 3, 9]
        assert [img.id for img in result[1].images] == [30, 31]

    def test_mixed_with_and_without_images(self):
        rows = [_row(1, 10), _row(2), _row(3, 30)]
        result = map_property_rows(rows)
        assert [len(p.images) for p in result] == [1, 0, 1]

    def test_hundreds_of_images(self):
        rows = [_row(1, image_id, sort_order=image_id) for image_id in range(1, 301)]
        result = map_property_rows(rows)
        assert len(result) == 1
        assert len(result[0].images) == 300
        assert [img.sort_order for img in result[0].images] == list(range(1, 301))

    def test_fields_and_enums_decoded(self):
        prop = map_property_rows([_row(5, 50, sort_order=4)])[0]
        assert prop.property_type is PropertyType.HOUSE
        assert prop.status is PropertyStatus.FOR_RENT
        assert prop.price == Decimal("250000.00")
        assert prop.area == Decimal("85.50")
        assert prop.is_deleted is False

        image = prop.images[0]
        assert image.property_id == 5
        assert image.url == "https://cdn.example.com/50.jpg"
        assert image.alt_text is None
        assert image.sort_order == 4
        assert image.created_at == _NOW


class TestMapSingleProperty:
    def test_none_when_no_rows(self):
        assert map_single_property([]) is None

    def test_returns_aggregate(self):
        prop = map_single_property([_row(4, 40), _row(4, 41, 1)])
        assert prop is not None
        assert prop.id == 4
        assert len(prop.images) == 2
