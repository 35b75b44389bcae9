"""
Village Backend — Place, Crop and Price Routes
================================================

Route Inventory:
    GET  /places                  all places
    GET  /locations               all places (404 when none)
    GET  /all-crops               all crops
    POST /add-crop                new crop (400 on duplicate name)
    PUT  /updateCrop/{id}         rename / reprice a crop
    PUT  /updatePrice/{cropId}    set a crop's average price
    POST /update-average-price    set a crop's average price (body-addressed)
    GET  /crops/{placeId}         crops priced at a place (reference join)
    POST /add-price               new price row (400 on duplicate place/crop)
    POST /update-price            change a price row
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from village_api.database import get_db_session
from village_api.exceptions import ValidationError
from village_api.routes import RecordIdPath
from village_api.schemas.common import ErrorResponse, MessageResponse
from village_api.schemas.crop import (
    AveragePriceUpdateRequest,
    CropCreateRequest,
    CropCreateResponse,
    CropPriceUpdateRequest,
    CropResponse,
    CropUpdateRequest,
    PlaceCropResponse,
    PlaceResponse,
    PriceCreateRequest,
    PriceUpdateRequest,
)
from village_api.services.crop_service import crop_service
from village_api.services.sequence_service import SequenceGenerator, get_sequence_generator


router = APIRouter(tags=["Crops"])

_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}
_DUPLICATE = {400: {"description": "Duplicate or invalid input", "model": ErrorResponse}}


# ── Places ────────────────────────────────────────────────────────────────

@router.get("/places", response_model=List[PlaceResponse])
async def list_places(db: AsyncSession = Depends(get_db_session)) -> List[PlaceResponse]:
    places = await crop_service.list_places(db)
    return [PlaceResponse.model_validate(p) for p in places]


@router.get("/locations", response_model=List[PlaceResponse], responses=_NOT_FOUND)
async def list_locations(db: AsyncSession = Depends(get_db_session)) -> List[PlaceResponse]:
    places = await crop_service.list_locations(db)
    return [PlaceResponse.model_validate(p) for p in places]


# ── Crops ─────────────────────────────────────────────────────────────────

@router.get("/all-crops", response_model=List[CropResponse])
async def list_crops(db: AsyncSession = Depends(get_db_session)) -> List[CropResponse]:
    crops = await crop_service.list_crops(db)
    return [CropResponse.model_validate(c) for c in crops]


@router.post("/add-crop", response_model=CropCreateResponse, responses=_DUPLICATE)
async def add_crop(
    payload: CropCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> CropCreateResponse:
    crop = await crop_service.add_crop(db, sequences, payload)
    return CropCreateResponse(
        message="Crop added successfully",
        crop=CropResponse.model_validate(crop),
    )


@router.put(
    "/updateCrop/{crop_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_DUPLICATE},
)
async def update_crop(
    crop_id: RecordIdPath,
    payload: CropUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await crop_service.update_crop(db, crop_id, payload)
    return MessageResponse(message="Crop updated successfully")


@router.put("/updatePrice/{crop_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def update_crop_price(
    crop_id: RecordIdPath,
    payload: CropPriceUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await crop_service.set_average_price(db, crop_id, payload.price)
    return MessageResponse(message="Crop price updated successfully")


@router.post("/update-average-price", response_model=MessageResponse, responses=_NOT_FOUND)
async def update_average_price(
    payload: AveragePriceUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await crop_service.set_average_price(db, payload.crop_id, payload.average_price)
    return MessageResponse(message="Average price updated successfully")


# ── Prices ────────────────────────────────────────────────────────────────

@router.get(
    "/crops/{place_id}",
    response_model=List[PlaceCropResponse],
    responses={400: {"description": "placeId is not an integer", "model": ErrorResponse}},
    summary="Crops available at a place with current and average prices",
)
async def crops_for_place(
    place_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[PlaceCropResponse]:
    """
    Price rows for the place joined with crop details. A crop deleted after
    its price was recorded shows up as "Unknown" with an average price of 0.
    """
    try:
        parsed_place_id = int(place_id)
    except ValueError:
        raise ValidationError(
            "Invalid placeId format. Ensure it is an integer.", field="placeId"
        )
    return await crop_service.crops_for_place(db, parsed_place_id)


@router.post("/add-price", response_model=MessageResponse, responses=_DUPLICATE)
async def add_price(
    payload: PriceCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    sequences: SequenceGenerator = Depends(get_sequence_generator),
) -> MessageResponse:
    await crop_service.add_price(db, sequences, payload)
    return MessageResponse(message="Price added successfully")


@router.post("/update-price", response_model=MessageResponse, responses=_NOT_FOUND)
async def update_price(
    payload: PriceUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await crop_service.update_price(db, payload)
    return MessageResponse(message="Price updated successfully")
