"""Pydantic schemas for ipo_catalog requests and responses.

Band and limit consistency (min <= max, positive lot size) is enforced here
so that the bid validator can rely on a well-formed IPO.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from src.ipo_catalog.domain.models import Ipo
from src.ipo_common.rupees import rupees_to_display

IpoCategoryLiteral = Literal["Mainboard", "SME"]
IpoStatusLiteral = Literal["Upcoming", "Active", "Closed"]


class IpoCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: IpoCategoryLiteral
    status: IpoStatusLiteral = "Upcoming"
    price_band_min: int = Field(..., ge=0)
    price_band_max: int = Field(..., ge=0)
    lot_size: int = Field(..., gt=0)
    retail_max_lot: int = Field(..., gt=0)
    hni_max_amount: int = Field(..., gt=0)
    open_date: date | None = None
    close_date: date | None = None

    @model_validator(mode="after")
    def band_is_ordered(self) -> "IpoCreateRequest":
        if self.price_band_min > self.price_band_max:
            raise ValueError("price_band_min must not exceed price_band_max")
        if self.open_date and self.close_date and self.open_date > self.close_date:
            raise ValueError("open_date must not be after close_date")
        return self


class IpoUpdateRequest(BaseModel):
    """Partial update; only supplied fields are written."""

    name: str | None = Field(None, min_length=1, max_length=200)
    category: IpoCategoryLiteral | None = None
    status: IpoStatusLiteral | None = None
    price_band_min: int | None = Field(None, ge=0)
    price_band_max: int | None = Field(None, ge=0)
    lot_size: int | None = Field(None, gt=0)
    retail_max_lot: int | None = Field(None, gt=0)
    hni_max_amount: int | None = Field(None, gt=0)
    open_date: date | None = None
    close_date: date | None = None


class IpoResponse(BaseModel):
    id: str
    name: str
    category: str
    status: str
    price_band_min: int
    price_band_max: int
    lot_size: int
    retail_max_lot: int
    hni_max_amount: int
    hni_max_amount_display: str
    open_date: str | None
    close_date: str | None

    @classmethod
    def from_domain(cls, ipo: Ipo) -> "IpoResponse":
        return cls(
            id=ipo.id,
            name=ipo.name,
            category=ipo.category,
            status=ipo.status,
            price_band_min=ipo.price_band_min,
            price_band_max=ipo.price_band_max,
            lot_size=ipo.lot_size,
            retail_max_lot=ipo.retail_max_lot,
            hni_max_amount=ipo.hni_max_amount,
            hni_max_amount_display=rupees_to_display(ipo.hni_max_amount),
            open_date=ipo.open_date.isoformat() if ipo.open_date else None,
            close_date=ipo.close_date.isoformat() if ipo.close_date else None,
        )
