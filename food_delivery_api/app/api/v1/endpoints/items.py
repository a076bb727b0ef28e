"""
Food item endpoints for API v1.

Listing and lookups are public.  Creating an item records the caller
as its owner; deleting requires the caller to be that owner and also
removes the item's reviews.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from food_delivery_api.app.core.security import get_current_identity
from food_delivery_api.app.core.store import AppState, get_state
from food_delivery_api.app.schemas.common import MessageRead, RecordId
from food_delivery_api.app.schemas.item import ItemCreate, ItemRead
from food_delivery_api.app.services.item_service import ItemService

router = APIRouter()


@router.get("/", response_model=List[ItemRead])
async def list_items(state: AppState = Depends(get_state)) -> List[ItemRead]:
    """Return every item in id order; 404 if there are none."""
    return await ItemService.list_items(state)


@router.get("/search", response_model=List[ItemRead])
async def search_items(
    query: str = Query(..., description="Substring matched against category and description"),
    state: AppState = Depends(get_state),
) -> List[ItemRead]:
    """Find items whose category or description contains ``query``."""
    return await ItemService.search_items(state, query)


@router.get("/{item_id}", response_model=ItemRead)
async def get_item(item_id: RecordId, state: AppState = Depends(get_state)) -> ItemRead:
    return await ItemService.get_item(state, item_id)


@router.post("/", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: ItemCreate,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> ItemRead:
    """Create a new item owned by the caller.

    Name must be at least 2 characters and description at least 4.
    """
    return await ItemService.create_item(state, data, identity)


@router.delete("/{item_id}", response_model=MessageRead)
async def delete_item(
    item_id: RecordId,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> MessageRead:
    """Delete an item (owner only) together with all of its reviews."""
    message = await ItemService.delete_item(state, item_id, identity)
    return MessageRead(message=message)
