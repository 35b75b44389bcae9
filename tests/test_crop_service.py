"""
Village Backend — Crop Service Tests
======================================

What:  Reference data operations and the crops-for-place join.
How:   Runs against a real (SQLite) database so the unique indexes and the
       outer join behave as they do in production.

What we test:
    ✅ Crops get sequential ids; a duplicate name is rejected and burns an id
    ✅ A second price for the same (place, crop) pair is rejected
    ✅ crops_for_place: empty place, price-id order, deleted crop placeholders
    ✅ Loosely typed prices pass through unchanged
    ✅ Updates of missing rows raise NotFoundError
"""

import pytest
from sqlalchemy import delete

from village_api.exceptions import DatabaseError, DuplicateKeyError, NotFoundError
from village_api.models.crop import Crop, Place, Price
from village_api.schemas.crop import (
    CropCreateRequest,
    CropUpdateRequest,
    PriceCreateRequest,
    PriceUpdateRequest,
)
from village_api.services.crop_service import UNKNOWN_AVG_PRICE, UNKNOWN_CROP_NAME, CropService


async def _add_places(db_session, *names):
    for i, name in enumerate(names, start=1):
        db_session.add(Place(id=i, place_name=name))
    await db_session.commit()


class TestCrops:

    def setup_method(self):
        self.service = CropService()

    @pytest.mark.asyncio
    async def test_add_crop_assigns_first_id(self, db_session, sequences, crop_payload):
        crop = await self.service.add_crop(db_session, sequences, CropCreateRequest(**crop_payload))
        await db_session.commit()

        assert crop.id == 1
        assert crop.crop_name == "Rice"
        assert crop.avg_price == 40

    @pytest.mark.asyncio
    async def test_duplicate_crop_rejected_and_id_not_reused(self, db_session, sequences, crop_payload):
        await self.service.add_crop(db_session, sequences, CropCreateRequest(**crop_payload))
        await db_session.commit()

        with pytest.raises(DuplicateKeyError) as exc_info:
            await self.service.add_crop(db_session, sequences, CropCreateRequest(**crop_payload))
        await db_session.rollback()
        assert exc_info.value.message == "Crop already exists"

        wheat = await self.service.add_crop(
            db_session, sequences, CropCreateRequest(crop_name="Wheat", avg_price=30)
        )
        await db_session.commit()
        assert wheat.id == 3

        crops = await self.service.list_crops(db_session)
        assert [c.crop_name for c in crops] == ["Rice", "Wheat"]

    @pytest.mark.asyncio
    async def test_update_crop_applies_only_given_fields(self, db_session, sequences, crop_payload):
        crop = await self.service.add_crop(db_session, sequences, CropCreateRequest(**crop_payload))
        await db_session.commit()

        updated = await self.service.update_crop(db_session, crop.id, CropUpdateRequest(avg_price="45-50"))
        await db_session.commit()

        assert updated.crop_name == "Rice"
        assert updated.avg_price == "45-50"

    @pytest.mark.asyncio
    async def test_update_missing_crop_raises(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_crop(db_session, 99, CropUpdateRequest(crop_name="Millet"))

    @pytest.mark.asyncio
    async def test_set_average_price(self, db_session, sequences, crop_payload):
        crop = await self.service.add_crop(db_session, sequences, CropCreateRequest(**crop_payload))
        await db_session.commit()

        await self.service.set_average_price(db_session, crop.id, {"min": 38, "max": 44})
        await db_session.commit()

        fetched = await self.service.get_crop(db_session, crop.id)
        assert fetched.avg_price == {"min": 38, "max": 44}


class TestPrices:

    def setup_method(self):
        self.service = CropService()

    @pytest.mark.asyncio
    async def test_duplicate_place_crop_pair_rejected(self, db_session, sequences):
        await _add_places(db_session, "Anandpur")
        payload = PriceCreateRequest(place_id=1, crop_id=1, price=42, month_year="2024-06")

        await self.service.add_price(db_session, sequences, payload)
        await db_session.commit()

        with pytest.raises(DuplicateKeyError) as exc_info:
            await self.service.add_price(db_session, sequences, payload)
        await db_session.rollback()

        assert exc_info.value.message == "Crop is already available in the location"

    @pytest.mark.asyncio
    async def test_same_crop_at_two_places_allowed(self, db_session, sequences):
        await _add_places(db_session, "Anandpur", "Belgaum")

        first = await self.service.add_price(db_session, sequences, PriceCreateRequest(place_id=1, crop_id=1, price=42))
        await db_session.commit()
        second = await self.service.add_price(db_session, sequences, PriceCreateRequest(place_id=2, crop_id=1, price=44))
        await db_session.commit()

        assert (first.id, second.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_update_price(self, db_session, sequences):
        price = await self.service.add_price(
            db_session, sequences, PriceCreateRequest(place_id=1, crop_id=1, price=42, month_year="2024-06")
        )
        await db_session.commit()

        updated = await self.service.update_price(
            db_session, PriceUpdateRequest(id=price.id, price=47, month_year="2024-07")
        )

        assert updated.price == 47
        assert updated.month_year == "2024-07"

    @pytest.mark.asyncio
    async def test_update_missing_price_raises(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_price(db_session, PriceUpdateRequest(id=5, price=1))


class TestCropsForPlace:

    def setup_method(self):
        self.service = CropService()

    @pytest.mark.asyncio
    async def test_place_without_prices_is_empty(self, db_session):
        await _add_places(db_session, "Anandpur")

        assert await self.service.crops_for_place(db_session, 1) == []

    @pytest.mark.asyncio
    async def test_rows_joined_in_price_id_order(self, db_session):
        db_session.add_all([
            Crop(id=1, crop_name="Rice", avg_price=40),
            Crop(id=2, crop_name="Wheat", avg_price=30),
            Price(id=2, place_id=1, crop_id=1, price=42, month_year="2024-06"),
            Price(id=1, place_id=1, crop_id=2, price=31, month_year="2024-06"),
            Price(id=3, place_id=2, crop_id=1, price=50, month_year="2024-06"),
        ])
        await db_session.commit()

        rows = await self.service.crops_for_place(db_session, 1)

        assert [r.model_dump() for r in rows] == [
            {"id": 1, "crop_name": "Wheat", "price": 31, "month_year": "2024-06", "avg_price": 30},
            {"id": 2, "crop_name": "Rice", "price": 42, "month_year": "2024-06", "avg_price": 40},
        ]

    @pytest.mark.asyncio
    async def test_deleted_crop_yields_placeholders(self, db_session):
        db_session.add_all([
            Crop(id=1, crop_name="Rice", avg_price=40),
            Price(id=1, place_id=1, crop_id=1, price=42, month_year="2024-06"),
        ])
        await db_session.commit()
        await db_session.execute(delete(Crop).where(Crop.id == 1))
        await db_session.commit()

        rows = await self.service.crops_for_place(db_session, 1)

        assert len(rows) == 1
        assert rows[0].crop_name == UNKNOWN_CROP_NAME
        assert rows[0].avg_price == UNKNOWN_AVG_PRICE
        assert rows[0].price == 42

    @pytest.mark.asyncio
    async def test_place_id_beyond_column_range_is_empty(self, mock_db_session):
        rows = await self.service.crops_for_place(mock_db_session, 2**63)

        assert rows == []
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_loose_price_values_pass_through(self, db_session):
        db_session.add_all([
            Crop(id=1, crop_name="Onion", avg_price="20-25"),
            Crop(id=2, crop_name="Garlic", avg_price={"min": 90, "max": 120}),
            Crop(id=3, crop_name="Jute", avg_price=True),
            Price(id=1, place_id=1, crop_id=1, price="22/kg"),
            Price(id=2, place_id=1, crop_id=2, price=[95, 100]),
            Price(id=3, place_id=1, crop_id=3, price=False),
        ])
        await db_session.commit()

        rows = await self.service.crops_for_place(db_session, 1)

        assert rows[0].price == "22/kg"
        assert rows[0].avg_price == "20-25"
        assert rows[0].month_year is None
        assert rows[1].price == [95, 100]
        assert rows[1].avg_price == {"min": 90, "max": 120}
        assert rows[2].price is False
        assert rows[2].avg_price is True


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_query_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError) as exc_info:
            await CropService().crops_for_place(mock_db_session, 1)

        assert exc_info.value.context["operation"] == "crops_for_place"
