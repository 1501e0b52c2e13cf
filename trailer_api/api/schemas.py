"""API schemas for the Trailer Store API.

Pydantic models for request/response validation and serialization.
Field names are snake_case in Python and camelCase on the wire.
"""

import re
from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trailer_api.domain.value_objects import Category, Currency

IMAGE_URL_PATTERN = re.compile(r"^https?://.+\.(jpg|jpeg|png|webp|gif)$", re.IGNORECASE)


def check_image_url(value: str) -> str:
    """Validate an image URL."""
    if not IMAGE_URL_PATTERN.match(value):
        raise ValueError("Invalid image URL format")
    return value


def normalize_keywords(values: list[str] | None) -> list[str] | None:
    """Trim and lowercase keywords, dropping blanks."""
    if values is None:
        return None
    return [keyword.strip().lower() for keyword in values if keyword and keyword.strip()]


# Stock is stored in a 32-bit integer column
MAX_QUANTITY = 2**31 - 1

ImageUrl = Annotated[str, AfterValidator(check_image_url)]
Keywords = Annotated[list[str], AfterValidator(normalize_keywords)]


# ============================================================================
# Common Schemas
# ============================================================================


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ErrorDetail(BaseModel):
    """Field-level error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")
    value: Any = Field(default=None, description="Rejected value")


class Envelope(BaseModel):
    """Standard response envelope.

    Every endpoint, successful or not, answers in this format.
    """

    success: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable message")
    data: Any = Field(default=None, description="Response payload")
    errors: list[ErrorDetail] | None = Field(default=None, description="Field errors")
    timestamp: datetime = Field(..., description="Response time (UTC)")


# ============================================================================
# Trailer Schemas
# ============================================================================


class SpecificationSchema(CamelModel):
    """A single technical specification line."""

    name: str = Field(..., min_length=1, description="Specification name")
    value: str = Field(..., min_length=1, description="Specification value")
    unit: str = Field(default="", description="Measurement unit")


class TrailerCreateRequest(CamelModel):
    """Request to create a trailer."""

    name: str = Field(..., min_length=3, max_length=200)
    slug: str | None = Field(default=None, description="Optional slug; derived from name if omitted")
    description: str = Field(..., min_length=1)
    short_description: str = Field(..., min_length=1, max_length=500)
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    category: Category
    price: float = Field(..., ge=0, allow_inf_nan=False)
    currency: Currency = Currency.UAH
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    in_stock: bool | None = None
    images: list[ImageUrl] = Field(default_factory=list)
    specifications: list[SpecificationSchema] = Field(default_factory=list)
    meta_title: str | None = Field(default=None, max_length=160)
    meta_description: str | None = Field(default=None, max_length=320)
    keywords: Keywords = Field(default_factory=list)
    is_featured: bool = False

    def to_fields(self) -> dict[str, Any]:
        """Convert to model column values."""
        fields = self.model_dump(mode="json")
        if fields["in_stock"] is None:
            del fields["in_stock"]
        return fields


class TrailerUpdateRequest(CamelModel):
    """Partial update; unspecified fields remain unchanged."""

    name: str | None = Field(default=None, min_length=3, max_length=200)
    slug: str | None = None
    description: str | None = Field(default=None, min_length=1)
    short_description: str | None = Field(default=None, min_length=1, max_length=500)
    brand: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    category: Category | None = None
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    currency: Currency | None = None
    quantity: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    in_stock: bool | None = None
    images: list[ImageUrl] | None = None
    specifications: list[SpecificationSchema] | None = None
    meta_title: str | None = Field(default=None, max_length=160)
    meta_description: str | None = Field(default=None, max_length=320)
    keywords: Keywords | None = None
    is_featured: bool | None = None

    def to_fields(self) -> dict[str, Any]:
        """Convert the explicitly sent, non-null fields to column values."""
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


class StockUpdateRequest(CamelModel):
    """Request to set the stock quantity."""

    quantity: int | None = Field(default=None, description="New stock quantity (>= 0)")


class TrailerResponse(CamelModel):
    """Trailer as returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    name: str
    slug: str
    description: str
    short_description: str
    brand: str
    model: str
    category: str
    price: float
    currency: str
    in_stock: bool
    quantity: int
    images: list[str]
    specifications: list[SpecificationSchema]
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str]
    is_featured: bool
    is_available: bool
    created_at: datetime
    updated_at: datetime
