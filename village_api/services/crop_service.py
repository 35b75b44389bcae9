"""
Village Backend — Crop & Price Service (Reference Join Engine)
================================================================

What:  Places, crops and per-place prices, plus the crops-for-place join.
Who:   Called by routes/crops.py.

Crops-for-place join:
    ┌──────────────┐  LEFT OUTER JOIN   ┌──────────────┐
    │ prices       │───────────────────▶│ crops        │
    │ place_id = p │ crops.id =         │              │
    └──────────────┘   prices.crop_id   └──────────────┘

    SELECT prices.id, prices.price, prices.month_year,
           crops.id, crops.crop_name, crops.avg_price
      FROM prices LEFT OUTER JOIN crops ON crops.id = prices.crop_id
     WHERE prices.place_id = :place_id
  ORDER BY prices.id

    A price row whose crop was deleted keeps its place in the listing, with
    crop_name "Unknown" and avg_price 0. "Missing" is decided on the joined
    crops.id, not on avg_price, because a stored avg_price may itself be a
    JSON null. A place with no prices yields an empty list. So does a place id
    outside the INTEGER column range, which no stored row can carry.

Uniqueness:
    crop_name and (place_id, crop_id) are unique indexes; inserts go straight
    to the database and a violation surfaces as DuplicateKeyError.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.exceptions import NotFoundError
from village_api.models.crop import Crop, Place, Price
from village_api.schemas.common import MAX_RECORD_ID, MIN_RECORD_ID
from village_api.schemas.crop import (
    CropCreateRequest,
    CropUpdateRequest,
    PlaceCropResponse,
    PriceCreateRequest,
    PriceUpdateRequest,
)
from village_api.services.sequence_service import SequenceGenerator
from village_api.services.store import store_errors

logger = logging.getLogger(__name__)

UNKNOWN_CROP_NAME = "Unknown"
UNKNOWN_AVG_PRICE = 0


class CropService:
    """Reference data operations; stateless, session passed per call."""

    # ── Places ────────────────────────────────────────────────────────────

    async def list_places(self, db: AsyncSession) -> List[Place]:
        with store_errors("list_places"):
            result = await db.execute(select(Place).order_by(Place.id))
            return list(result.scalars().all())

    async def list_locations(self, db: AsyncSession) -> List[Place]:
        """Same rows as list_places, but an empty table is a NotFoundError."""
        places = await self.list_places(db)
        if not places:
            raise NotFoundError(resource="location", message="No locations found")
        return places

    # ── Crops ─────────────────────────────────────────────────────────────

    async def list_crops(self, db: AsyncSession) -> List[Crop]:
        with store_errors("list_crops"):
            result = await db.execute(select(Crop).order_by(Crop.id))
            return list(result.scalars().all())

    async def add_crop(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: CropCreateRequest
    ) -> Crop:
        """
        Insert a crop with the next "crop" id.

        Raises:
            DuplicateKeyError: crop_name already exists. The id drawn for the
                attempt is not reused.
        """
        crop_id = await sequences.next_value("crop")
        crop = Crop(id=crop_id, crop_name=payload.crop_name, avg_price=payload.avg_price)
        with store_errors("add_crop", duplicate_message="Crop already exists", crop_name=payload.crop_name):
            db.add(crop)
            await db.flush()
        logger.info("Crop %d (%s) added", crop_id, payload.crop_name)
        return crop

    async def get_crop(self, db: AsyncSession, crop_id: int) -> Crop:
        with store_errors("get_crop", crop_id=crop_id):
            result = await db.execute(select(Crop).where(Crop.id == crop_id))
            crop = result.scalar_one_or_none()
        if crop is None:
            raise NotFoundError(resource="crop", resource_id=crop_id)
        return crop

    async def update_crop(self, db: AsyncSession, crop_id: int, payload: CropUpdateRequest) -> Crop:
        """Apply the non-null fields of the payload to an existing crop."""
        crop = await self.get_crop(db, crop_id)
        changes = payload.model_dump(exclude_none=True)
        for field, value in changes.items():
            setattr(crop, field, value)

        with store_errors("update_crop", duplicate_message="Crop already exists", crop_id=crop_id):
            await db.flush()
        return crop

    async def set_average_price(self, db: AsyncSession, crop_id: int, avg_price: Any) -> Crop:
        crop = await self.get_crop(db, crop_id)
        crop.avg_price = avg_price
        with store_errors("set_average_price", crop_id=crop_id):
            await db.flush()
        return crop

    # ── Prices ────────────────────────────────────────────────────────────

    async def add_price(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: PriceCreateRequest
    ) -> Price:
        """
        Record the price of a crop at a place.

        Raises:
            DuplicateKeyError: A price already exists for (place_id, crop_id).
        """
        price_id = await sequences.next_value("price")
        price = Price(
            id=price_id,
            place_id=payload.place_id,
            crop_id=payload.crop_id,
            price=payload.price,
            month_year=payload.month_year,
        )
        with store_errors(
            "add_price",
            duplicate_message="Crop is already available in the location",
            place_id=payload.place_id,
            crop_id=payload.crop_id,
        ):
            db.add(price)
            await db.flush()
        logger.info("Price %d added for place %d crop %d", price_id, payload.place_id, payload.crop_id)
        return price

    async def update_price(self, db: AsyncSession, payload: PriceUpdateRequest) -> Price:
        with store_errors("update_price", price_id=payload.id):
            result = await db.execute(select(Price).where(Price.id == payload.id))
            price = result.scalar_one_or_none()
            if price is None:
                raise NotFoundError(resource="price", resource_id=payload.id)
            price.price = payload.price
            price.month_year = payload.month_year
            await db.flush()
        return price

    # ── Reference Join ────────────────────────────────────────────────────

    async def crops_for_place(self, db: AsyncSession, place_id: int) -> List[PlaceCropResponse]:
        """
        List the crops priced at a place.

        Returns:
            One PlaceCropResponse per price row, in price-id order. Rows whose
            crop no longer exists carry the "Unknown"/0 placeholders.
        """
        if not MIN_RECORD_ID <= place_id <= MAX_RECORD_ID:
            return []

        stmt = (
            select(
                Price.id,
                Price.price,
                Price.month_year,
                Crop.id.label("matched_crop_id"),
                Crop.crop_name,
                Crop.avg_price,
            )
            .select_from(Price)
            .outerjoin(Crop, Crop.id == Price.crop_id)
            .where(Price.place_id == place_id)
            .order_by(Price.id)
        )

        with store_errors("crops_for_place", place_id=place_id):
            result = await db.execute(stmt)
            rows = result.all()

        return [PlaceCropResponse(**self._project_row(row._mapping)) for row in rows]

    @staticmethod
    def _project_row(row: Dict[str, Any]) -> Dict[str, Any]:
        if row["matched_crop_id"] is None:
            crop_name, avg_price = UNKNOWN_CROP_NAME, UNKNOWN_AVG_PRICE
        else:
            crop_name = row["crop_name"]
            avg_price = row["avg_price"] if row["avg_price"] is not None else UNKNOWN_AVG_PRICE
        return {
            "id": row["id"],
            "crop_name": crop_name,
            "price": row["price"],
            "month_year": row["month_year"],
            "avg_price": avg_price,
        }


crop_service = CropService()
