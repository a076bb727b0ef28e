"""
Business logic for clients.

A client records the identity of its creator as ``owner``.  Orders,
delivery confirmations and reviews placed on behalf of a client are
authorized against that owner.
"""

import logging
from typing import List

from ..core.errors import NotFound
from ..core.store import AppState
from ..core.validation import parse_payload
from ..schemas.client import ClientCreate, ClientRead

logger = logging.getLogger(__name__)


class ClientService:
    """Service for working with clients."""

    @classmethod
    async def list_clients(cls, state: AppState) -> List[ClientRead]:
        clients = state.clients.values()
        if not clients:
            raise NotFound("no clients could be found")
        return clients

    @classmethod
    async def get_client(cls, state: AppState, client_id: int) -> ClientRead:
        client = state.clients.get(client_id)
        if client is None:
            raise NotFound(f"no client could be found for id: {client_id}")
        return client

    @classmethod
    async def create_client(cls, state: AppState, data: ClientCreate, identity: str) -> ClientRead:
        """Register a client owned by ``identity``.

        Name and address length are checked before an id is allocated.
        """
        data = parse_payload(ClientCreate, data)
        with state.transaction():
            client_id = state.ids.next_id()
            client = ClientRead(id=client_id, owner=identity, **data.model_dump())
            state.clients.insert(client_id, client)
        logger.info("Caller %s registered client %s", identity, client_id)
        return client
