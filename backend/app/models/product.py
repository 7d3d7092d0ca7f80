"""
Product model for the storefront catalog
"""

from sqlalchemy import Column, String, Text, Numeric
from sqlalchemy.orm import validates

from app.models.base import BaseModel

PRODUCT_STATUSES = ("draft", "active", "archived")


class Product(BaseModel):
    """
    Product model representing one catalog entry
    """
    __tablename__ = "products"

    name = Column(
        String(500),
        nullable=False,
        comment="Product display name"
    )

    slug = Column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
        comment="URL slug; the storefront falls back to the id when empty"
    )

    description = Column(
        Text,
        nullable=True,
        comment="Product description (HTML)"
    )

    price = Column(
        Numeric(10, 2),
        nullable=True,
        comment="List price in the store currency"
    )

    status = Column(
        String(50),
        nullable=False,
        default="draft",
        index=True,
        comment="Product status (active, draft, archived)"
    )

    @validates('status')
    def validate_status(self, key, value):
        if value not in PRODUCT_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(PRODUCT_STATUSES)}")
        return value

    @validates('slug')
    def validate_slug(self, key, value):
        """Empty slugs are stored as NULL so the id fallback applies"""
        if value is not None and not value.strip():
            return None
        return value

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug='{self.slug}')>"
