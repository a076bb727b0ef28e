"""
Pydantic models for food items.

Items are offered by an owner (the identity that created them) and
referenced by id from orders and reviews.
"""

from pydantic import BaseModel, Field

from .common import U64_MAX


class ItemBase(BaseModel):
    name: str = Field(..., min_length=2, examples=["Margherita"])
    description: str = Field(..., min_length=4, examples=["Tomato, mozzarella, basil"])
    price: int = Field(..., ge=0, le=U64_MAX, examples=[12])
    category: str = Field("", examples=["pizza"])


class ItemCreate(ItemBase):
    """Schema for creating an item."""
    pass


class ItemRead(ItemBase):
    """Schema for reading an item; also the stored record."""

    id: int = Field(..., ge=0, le=U64_MAX)
    owner: str
