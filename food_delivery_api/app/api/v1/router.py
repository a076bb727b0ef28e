"""
Top-level router for version 1 of the API.

Aggregates the entity routers under a unified prefix.  When a new
entity is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import clients, items, orders, reviews

router = APIRouter()

router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(items.router, prefix="/items", tags=["items"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
