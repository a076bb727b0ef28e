"""
Business logic for orders.

An order belongs to a client and can only be placed, updated or
confirmed by the identity that owns that client.  Orders move from
``"order placed"`` to ``"order delivered"``; delivery is terminal.

Unknown item ids in an order are not an error: they are kept in the
order's item map but contribute nothing to the total.
"""

import logging
from typing import Dict, List

from ..core.errors import AlreadyDelivered, InvalidPayload, NotFound
from ..core.security import ensure_owner
from ..core.store import AppState
from ..core.validation import parse_payload
from ..schemas.client import ClientRead
from ..schemas.common import U64_MAX
from ..schemas.order import (
    ORDER_DELIVERED,
    ORDER_PLACED,
    OrderCreate,
    OrderRead,
    OrderStatusUpdate,
)

logger = logging.getLogger(__name__)


class OrderService:
    """Service for placing and tracking orders."""

    @classmethod
    async def list_orders(cls, state: AppState) -> List[OrderRead]:
        orders = state.orders.values()
        if not orders:
            raise NotFound("no orders could be found")
        return orders

    @classmethod
    async def get_order(cls, state: AppState, order_id: int) -> OrderRead:
        order = state.orders.get(order_id)
        if order is None:
            raise NotFound(f"no order could be found for id: {order_id}")
        return order

    @classmethod
    async def list_orders_by_client(cls, state: AppState, client_id: int) -> List[OrderRead]:
        orders = state.orders.filter(lambda order: order.client_id == client_id)
        if not orders:
            raise NotFound(f"no orders could be found for client_id: {client_id}")
        return orders

    @staticmethod
    def _owning_client(state: AppState, order: OrderRead) -> ClientRead:
        client = state.clients.get(order.client_id)
        if client is None:
            raise NotFound(f"no client could be found for id: {order.client_id}")
        return client

    @staticmethod
    def compute_total(state: AppState, quantities: Dict[int, int]) -> int:
        """Sum ``price * quantity`` over the items that exist in the store.

        A total that does not fit in an unsigned 64-bit value is rejected.
        """
        total = sum(
            item.price * quantities[item.id]
            for item in state.items.filter(lambda item: item.id in quantities)
        )
        if total > U64_MAX:
            raise InvalidPayload(f"order total {total} exceeds {U64_MAX}")
        return total

    @classmethod
    async def create_order(cls, state: AppState, data: OrderCreate, identity: str) -> OrderRead:
        """Place an order for a client owned by ``identity``.

        1. Reject an empty item list.
        2. Resolve the client and check the caller owns it.
        3. Allocate an id, build the item map (the last entry wins on a
           repeated item id) and compute the total from current prices.
        4. Store the order as ``"order placed"``.
        """
        data = parse_payload(OrderCreate, data)
        if not data.items:
            raise InvalidPayload("Cannot create an order with no items.")

        client = state.clients.get(data.client_id)
        if client is None:
            raise NotFound(f"no client could be found for id: {data.client_id}")
        ensure_owner(client.owner, identity, "Caller is not the client's owner")

        with state.transaction():
            order_id = state.ids.next_id()
            quantities = {entry.item_id: entry.quantity for entry in data.items}
            order = OrderRead(
                id=order_id,
                client_id=data.client_id,
                items=quantities,
                total=cls.compute_total(state, quantities),
                status=ORDER_PLACED,
                delivered=False,
            )
            state.orders.insert(order_id, order)

        logger.info(
            "Client %s placed order %s, total %s", data.client_id, order_id, order.total
        )
        return order

    @classmethod
    async def update_order_status(
        cls,
        state: AppState,
        order_id: int,
        data: OrderStatusUpdate,
        identity: str,
    ) -> str:
        """Replace the free-text status of an undelivered order.

        Delivery itself goes through ``confirm_delivery`` so that the
        ``delivered`` flag and the status string never disagree.
        """
        data = parse_payload(OrderStatusUpdate, data)
        order = await cls.get_order(state, order_id)
        client = cls._owning_client(state, order)
        ensure_owner(client.owner, identity, "Caller is not the client's owner")
        if order.delivered:
            raise AlreadyDelivered(f"order id: {order_id} is already delivered")
        if data.status == ORDER_DELIVERED:
            raise InvalidPayload("use delivery confirmation to mark an order as delivered")

        state.orders.insert(order_id, order.model_copy(update={"status": data.status}))
        logger.info("Order %s status set to '%s'", order_id, data.status)
        return f"order id: {order_id} status updated to {data.status}"

    @classmethod
    async def confirm_delivery(cls, state: AppState, order_id: int, identity: str) -> str:
        """Move an order to the delivered state.

        Guards are checked in order: the order exists, its client
        exists, the caller owns the client, the order is not delivered
        yet.  The flag and status are written in a single update.
        """
        order = await cls.get_order(state, order_id)
        client = cls._owning_client(state, order)
        ensure_owner(client.owner, identity, "Caller isn't the client's owner.")
        if order.delivered:
            raise AlreadyDelivered(f"order id: {order_id} is already delivered")

        state.orders.insert(
            order_id,
            order.model_copy(update={"delivered": True, "status": ORDER_DELIVERED}),
        )
        logger.info("Order %s delivered to client %s", order_id, order.client_id)
        return f"order id: {order_id} is delivered"
