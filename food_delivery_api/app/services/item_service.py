"""
Business logic for food items.

Items are owned by the identity that created them; only that identity
may delete an item.  Deleting an item also deletes every review
written about it.
"""

import logging
from typing import List

from ..core.errors import NotFound
from ..core.security import ensure_owner
from ..core.store import AppState
from ..core.validation import parse_payload
from ..schemas.item import ItemCreate, ItemRead

logger = logging.getLogger(__name__)


class ItemService:
    """Service for managing food items."""

    @classmethod
    async def list_items(cls, state: AppState) -> List[ItemRead]:
        items = state.items.values()
        if not items:
            raise NotFound("no Food items for order could be found")
        return items

    @classmethod
    async def get_item(cls, state: AppState, item_id: int) -> ItemRead:
        item = state.items.get(item_id)
        if item is None:
            raise NotFound(f"no Food item could be found for id: {item_id}")
        return item

    @classmethod
    async def search_items(cls, state: AppState, query: str) -> List[ItemRead]:
        """Return items whose category or description contains ``query``.

        Matching is a case-sensitive substring test over a full scan.
        """
        items = state.items.filter(
            lambda item: query in item.category or query in item.description
        )
        if not items:
            raise NotFound(f"no Food items for category: {query} could be found")
        return items

    @classmethod
    async def create_item(cls, state: AppState, data: ItemCreate, identity: str) -> ItemRead:
        """Create a new item owned by ``identity``.

        The payload is validated before an id is allocated, so invalid
        input never consumes an id.
        """
        data = parse_payload(ItemCreate, data)
        with state.transaction():
            item_id = state.ids.next_id()
            item = ItemRead(id=item_id, owner=identity, **data.model_dump())
            state.items.insert(item_id, item)
        logger.info("Caller %s created item %s '%s'", identity, item_id, item.name)
        return item

    @classmethod
    async def delete_item(cls, state: AppState, item_id: int, identity: str) -> str:
        """Delete an item and cascade to its reviews.

        Only the item owner may delete it.  Reviews are found by a full
        scan of the review store; they and the item are removed in one
        transaction.
        """
        item = await cls.get_item(state, item_id)
        ensure_owner(item.owner, identity, f"Caller is not the item owner of the item with id={item_id}")

        with state.transaction():
            review_ids = [
                review_id
                for review_id, review in state.reviews.scan()
                if review.item_id == item_id
            ]
            for review_id in review_ids:
                state.reviews.remove(review_id)
            if state.items.remove(item_id) is None:
                raise NotFound(f"Food item id: {item_id} could not be deleted")

        logger.info(
            "Caller %s deleted item %s and %d review(s)", identity, item_id, len(review_ids)
        )
        return f"Food item id: {item_id} deleted"
