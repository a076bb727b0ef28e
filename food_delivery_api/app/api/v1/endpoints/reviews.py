"""
API endpoints for item reviews.

Anyone may read reviews.  Writing or deleting a review requires the
caller to own the client the review is written for.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from food_delivery_api.app.core.security import get_current_identity
from food_delivery_api.app.core.store import AppState, get_state
from food_delivery_api.app.schemas.common import MessageRead, RecordId
from food_delivery_api.app.schemas.review import ReviewCreate, ReviewRead
from food_delivery_api.app.services.review_service import ReviewService

router = APIRouter()


@router.get("/", response_model=List[ReviewRead], summary="List reviews")
async def list_reviews(state: AppState = Depends(get_state)) -> List[ReviewRead]:
    return await ReviewService.list_reviews(state)


@router.get("/item/{item_id}", response_model=List[ReviewRead], summary="List reviews of an item")
async def list_reviews_by_item(
    item_id: RecordId,
    state: AppState = Depends(get_state),
) -> List[ReviewRead]:
    return await ReviewService.list_reviews_by_item(state, item_id)


@router.get("/{review_id}", response_model=ReviewRead, summary="Get a single review")
async def get_review(review_id: RecordId, state: AppState = Depends(get_state)) -> ReviewRead:
    return await ReviewService.get_review(state, review_id)


@router.post(
    "/",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review",
)
async def create_review(
    data: ReviewCreate,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> ReviewRead:
    """Create a review of an existing item on behalf of the caller's client."""
    return await ReviewService.create_review(state, data, identity)


@router.delete("/{review_id}", response_model=MessageRead, summary="Delete a review")
async def delete_review(
    review_id: RecordId,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> MessageRead:
    message = await ReviewService.delete_review(state, review_id, identity)
    return MessageRead(message=message)
