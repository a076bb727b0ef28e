"""
Pydantic models for orders.

``OrderRead.items`` maps item id to quantity.  The ``total`` is fixed
when the order is placed and is not recomputed if item prices change
later.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from .common import U64, U64_MAX

ORDER_PLACED = "order placed"
ORDER_DELIVERED = "order delivered"


class OrderItem(BaseModel):
    item_id: int = Field(..., ge=0, le=U64_MAX)
    quantity: int = Field(..., ge=0, le=U64_MAX)


class OrderCreate(BaseModel):
    """Schema for placing an order.

    An empty ``items`` list passes schema validation and is rejected by
    ``OrderService.create_order`` instead.
    """

    client_id: int = Field(..., ge=0, le=U64_MAX)
    items: List[OrderItem] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, examples=["out for delivery"])


class OrderRead(BaseModel):
    """Schema for reading an order; also the stored record."""

    id: int = Field(..., ge=0, le=U64_MAX)
    client_id: int = Field(..., ge=0, le=U64_MAX)
    items: Dict[U64, U64] = Field(default_factory=dict)
    total: int = Field(0, ge=0, le=U64_MAX)
    status: str = ORDER_PLACED
    delivered: bool = False
