"""
Village Backend — Place, Crop and Price Schemas
=================================================

What:  API contract for the crop/price reference dataset.

Loose price values:
    `price` and `avg_price` may be a number, a string, an object or a list.
    `PriceValue` spells out that union so every consumer sees it; the values
    are stored and returned unchanged and never used in arithmetic.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from village_api.schemas.common import RecordId

# bool precedes int so JSON true/false is not coerced to 1/0
PriceValue = Union[bool, int, float, str, Dict[str, Any], List[Any]]


class PlaceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    place_name: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Crops
# ══════════════════════════════════════════════════════════════════════════


class CropCreateRequest(BaseModel):
    crop_name: str
    avg_price: PriceValue


class CropUpdateRequest(BaseModel):
    """Fields left out (or null) keep their stored value."""
    crop_name: Optional[str] = None
    avg_price: Optional[PriceValue] = None


class CropPriceUpdateRequest(BaseModel):
    price: PriceValue


class AveragePriceUpdateRequest(BaseModel):
    crop_id: RecordId
    average_price: PriceValue


class CropResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    crop_name: str
    avg_price: PriceValue


class CropCreateResponse(BaseModel):
    message: str
    crop: CropResponse


# ══════════════════════════════════════════════════════════════════════════
# Prices
# ══════════════════════════════════════════════════════════════════════════


class PriceCreateRequest(BaseModel):
    place_id: RecordId
    crop_id: RecordId
    price: Optional[PriceValue] = None
    month_year: Optional[str] = None


class PriceUpdateRequest(BaseModel):
    id: RecordId
    price: Optional[PriceValue] = None
    month_year: Optional[str] = None


class PlaceCropResponse(BaseModel):
    """
    One row of GET /crops/{placeId}.

    `id` is the price row's id. `crop_name` is "Unknown" and `avg_price` is 0
    when the referenced crop no longer exists.
    """
    id: int
    crop_name: str
    price: Optional[PriceValue] = None
    month_year: Optional[str] = None
    avg_price: PriceValue
