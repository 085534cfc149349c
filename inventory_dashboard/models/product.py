"""Product domain models and catalog payload schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _to_decimal(value: Any) -> Any:
    # Floats go through repr so 10.005 stays 10.005 instead of its binary expansion
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


class Category(BaseModel):
    """Represents a category coming from the catalog service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Unique identifier of the category")
    name: str
    slug: str | None = None
    image: str | None = None


class Product(BaseModel):
    """Product record as served by the catalog service.

    Records are immutable once parsed; the collection manager replaces whole
    records rather than editing them.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int = Field(..., description="Unique identifier assigned by the catalog")
    title: str
    price: Decimal = Field(..., ge=0)
    description: str = ""
    creation_at: datetime = Field(..., alias="creationAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    slug: str | None = None
    images: tuple[str, ...] = ()
    category: Category | None = None

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Any:
        return _to_decimal(value)


class ProductCreate(BaseModel):
    """Payload used to create a product through the catalog."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=3, max_length=100)
    price: Decimal = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=500)
    category_id: int = Field(..., alias="categoryId", ge=1)
    image_url: str = Field(..., alias="imageUrl", min_length=1)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Any:
        return _to_decimal(value)

    @field_serializer("price", when_used="json")
    def _serialize_price(self, value: Decimal) -> float:
        return float(value)

    def to_catalog_payload(self) -> dict[str, Any]:
        """Return the JSON body expected by the catalog's create endpoint."""

        payload = self.model_dump(mode="json", by_alias=True, exclude={"image_url"})
        payload["images"] = [self.image_url]
        return payload


class ProductUpdate(BaseModel):
    """Partial update payload; only fields that were set are sent."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=3, max_length=100)
    price: Decimal | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    category_id: int | None = Field(default=None, alias="categoryId", ge=1)
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Any:
        return _to_decimal(value)

    @field_serializer("price", when_used="json")
    def _serialize_price(self, value: Decimal | None) -> float | None:
        return None if value is None else float(value)

    def to_catalog_payload(self) -> dict[str, Any]:
        """Return the JSON body for the catalog's update endpoint.

        An image URL is normalized into a single-element ``images`` list; an
        empty image URL leaves the stored images untouched.
        """

        payload = self.model_dump(
            mode="json",
            by_alias=True,
            exclude_unset=True,
            exclude_none=True,
            exclude={"image_url"},
        )
        if self.image_url:
            payload["images"] = [self.image_url]
        return payload
