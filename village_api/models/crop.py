"""
Village Backend — Crop Reference SQLAlchemy Models
====================================================

What:  Places, crops and the per-place price list joining them.

Table Design:
    - places: static reference data (id, place_name); ids are assigned by
      whoever loads the data, not by a sequence
    - crops: unique crop_name; avg_price is a JSON value
    - prices: one row per (place_id, crop_id) enforced by `uq_prices_place_crop`

    place_id / crop_id are plain integers without foreign keys. A price row
    may outlive the crop it points to; the crops-for-place query reports such
    rows with placeholder crop data instead of dropping them.

    `price` and `avg_price` are JSON columns: a value may be a number, a
    string, or a structured object, and is returned exactly as stored.
"""

from typing import Any, Optional

from sqlalchemy import JSON, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from village_api.database import Base


class Place(Base):
    """A village or market location."""

    __tablename__ = "places"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    place_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Place(id={self.id}, place_name='{self.place_name}')>"


class Crop(Base):
    """A crop and its average price."""

    __tablename__ = "crops"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    crop_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    avg_price: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<Crop(id={self.id}, crop_name='{self.crop_name}')>"


class Price(Base):
    """Price of one crop at one place for a given month."""

    __tablename__ = "prices"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    place_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    crop_id: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Any] = mapped_column(JSON, nullable=True)
    month_year: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    __table_args__ = (
        UniqueConstraint("place_id", "crop_id", name="uq_prices_place_crop"),
    )

    def __repr__(self) -> str:
        return (
            f"<Price(id={self.id}, place_id={self.place_id}, "
            f"crop_id={self.crop_id}, month_year='{self.month_year}')>"
        )
