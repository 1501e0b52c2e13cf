"""SQLAlchemy models for the trailer catalog.

Defines the Trailer table for persistent storage.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trailer_api.domain.value_objects import Currency
from trailer_api.infrastructure.database import Base


def utc_now() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


class Trailer(Base):
    """Trailer entity in the catalog.

    Attributes:
        id: Unique trailer identifier (UUID string).
        name: Display name.
        slug: Unique URL-safe identifier derived from the name.
        description: Full description, may contain HTML.
        short_description: Short description for listings.
        brand: Manufacturer brand.
        model: Manufacturer model.
        category: One of the fixed category names.
        price: Price in major currency units.
        currency: Currency code (default UAH).
        in_stock: Whether trailer is available.
        quantity: Units in stock.
        images: Image URLs.
        specifications: Ordered list of {name, value, unit}.
        meta_title: SEO title.
        meta_description: SEO description.
        keywords: Lowercase search keywords.
        is_featured: Whether shown in the featured list.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "trailers"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(String(500), nullable=False)
    brand: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default=Currency.UAH.value)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    specifications: Mapped[list[dict[str, str]]] = mapped_column(JSON, nullable=False, default=list)
    meta_title: Mapped[str | None] = mapped_column(String(160), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(String(320), nullable=True)
    keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    __table_args__ = (
        Index("ix_trailers_featured_stock", "is_featured", "in_stock"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Trailer(id={self.id}, slug={self.slug})>"

    @property
    def is_available(self) -> bool:
        """Whether the trailer can be ordered right now."""
        return bool(self.in_stock) and (self.quantity or 0) > 0

    def apply_stock(self, quantity: int, in_stock: bool | None = None) -> None:
        """Set quantity and availability together.

        Quantity is clamped to zero. Availability is always false for an
        empty stock; otherwise it takes ``in_stock`` when given and
        defaults to available.

        Args:
            quantity: New quantity.
            in_stock: Requested availability flag.
        """
        self.quantity = max(0, int(quantity))
        if self.quantity <= 0:
            self.in_stock = False
        else:
            self.in_stock = True if in_stock is None else bool(in_stock)

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Apply a partial update, keeping the stock invariant.

        Args:
            changes: Column values keyed by attribute name.
        """
        stock_fields = {"quantity", "in_stock"}
        for key, value in changes.items():
            if key not in stock_fields:
                setattr(self, key, value)

        if stock_fields & changes.keys():
            self.apply_stock(
                changes.get("quantity", self.quantity),
                changes.get("in_stock"),
            )
