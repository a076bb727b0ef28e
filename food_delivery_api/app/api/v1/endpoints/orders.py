"""
Order endpoints for API v1.

Placing an order, changing its status and confirming delivery all
require the caller to own the order's client.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from food_delivery_api.app.core.security import get_current_identity
from food_delivery_api.app.core.store import AppState, get_state
from food_delivery_api.app.schemas.common import MessageRead, RecordId
from food_delivery_api.app.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate
from food_delivery_api.app.services.order_service import OrderService

router = APIRouter()


@router.get("/", response_model=List[OrderRead])
async def list_orders(state: AppState = Depends(get_state)) -> List[OrderRead]:
    return await OrderService.list_orders(state)


@router.get("/client/{client_id}", response_model=List[OrderRead])
async def list_orders_by_client(
    client_id: RecordId,
    state: AppState = Depends(get_state),
) -> List[OrderRead]:
    """All orders placed for ``client_id``; 404 if there are none."""
    return await OrderService.list_orders_by_client(state, client_id)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: RecordId, state: AppState = Depends(get_state)) -> OrderRead:
    return await OrderService.get_order(state, order_id)


@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> OrderRead:
    """Place an order.

    The total is computed from current item prices.  Item ids that do
    not exist are kept in the order but add nothing to the total.
    """
    return await OrderService.create_order(state, data, identity)


@router.put("/{order_id}/status", response_model=MessageRead)
async def update_order_status(
    order_id: RecordId,
    data: OrderStatusUpdate,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> MessageRead:
    message = await OrderService.update_order_status(state, order_id, data, identity)
    return MessageRead(message=message)


@router.post("/{order_id}/confirm-delivery", response_model=MessageRead)
async def confirm_delivery(
    order_id: RecordId,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> MessageRead:
    """Mark an order as delivered.  A second call returns 409."""
    message = await OrderService.confirm_delivery(state, order_id, identity)
    return MessageRead(message=message)
