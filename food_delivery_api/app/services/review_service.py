"""
Business logic for reviews.

A review is written on behalf of a client owned by the caller and must
refer to an existing item.  Only the owner of the reviewing client may
delete the review.  Reviews of an item are also removed by
``ItemService.delete_item``.
"""

import logging
from typing import List

from ..core.errors import NotFound
from ..core.security import ensure_owner
from ..core.store import AppState
from ..core.validation import parse_payload
from ..schemas.review import ReviewCreate, ReviewRead

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for handling item reviews."""

    @classmethod
    async def list_reviews(cls, state: AppState) -> List[ReviewRead]:
        reviews = state.reviews.values()
        if not reviews:
            raise NotFound("no reviews could be found")
        return reviews

    @classmethod
    async def get_review(cls, state: AppState, review_id: int) -> ReviewRead:
        review = state.reviews.get(review_id)
        if review is None:
            raise NotFound(f"no review could be found for id: {review_id}")
        return review

    @classmethod
    async def list_reviews_by_item(cls, state: AppState, item_id: int) -> List[ReviewRead]:
        reviews = state.reviews.filter(lambda review: review.item_id == item_id)
        if not reviews:
            raise NotFound(f"no reviews could be found for item_id: {item_id}")
        return reviews

    @classmethod
    async def create_review(cls, state: AppState, data: ReviewCreate, identity: str) -> ReviewRead:
        """Create a review of an existing item.

        The item and the client must exist and the caller must own the
        client.  All checks run before an id is allocated.
        """
        data = parse_payload(ReviewCreate, data)
        if state.items.get(data.item_id) is None:
            raise NotFound(f"no Food item could be found for id: {data.item_id}")
        client = state.clients.get(data.client_id)
        if client is None:
            raise NotFound(f"no client could be found for id: {data.client_id}")
        ensure_owner(client.owner, identity, "Caller is not the client's owner")

        with state.transaction():
            review_id = state.ids.next_id()
            review = ReviewRead(id=review_id, **data.model_dump())
            state.reviews.insert(review_id, review)
        logger.info(
            "Client %s submitted review %s for item %s", data.client_id, review_id, data.item_id
        )
        return review

    @classmethod
    async def delete_review(cls, state: AppState, review_id: int, identity: str) -> str:
        review = await cls.get_review(state, review_id)
        client = state.clients.get(review.client_id)
        if client is None:
            raise NotFound(f"no client could be found for id: {review.client_id}")
        ensure_owner(client.owner, identity, "Caller is not the client's owner")

        if state.reviews.remove(review_id) is None:
            raise NotFound(f"Review id: {review_id} could not be deleted")
        logger.info("Caller %s deleted review %s", identity, review_id)
        return f"Review id: {review_id} deleted"
