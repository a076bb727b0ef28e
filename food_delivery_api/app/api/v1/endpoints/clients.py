"""
Client endpoints for API v1.

Registering a client requires a token; the token subject becomes the
client's owner.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from food_delivery_api.app.core.security import get_current_identity
from food_delivery_api.app.core.store import AppState, get_state
from food_delivery_api.app.schemas.client import ClientCreate, ClientRead
from food_delivery_api.app.schemas.common import RecordId
from food_delivery_api.app.services.client_service import ClientService

router = APIRouter()


@router.get("/", response_model=List[ClientRead])
async def list_clients(state: AppState = Depends(get_state)) -> List[ClientRead]:
    return await ClientService.list_clients(state)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(client_id: RecordId, state: AppState = Depends(get_state)) -> ClientRead:
    return await ClientService.get_client(state, client_id)


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    state: AppState = Depends(get_state),
    identity: str = Depends(get_current_identity),
) -> ClientRead:
    """Register a client owned by the caller.

    Name must be at least 2 characters and address at least 4.
    """
    return await ClientService.create_client(state, data, identity)
