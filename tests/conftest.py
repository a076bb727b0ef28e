import asyncio

import pytest
from fastapi.testclient import TestClient

from food_delivery_api.app.core.security import create_access_token
from food_delivery_api.app.core.store import AppState
from food_delivery_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "food_delivery.db")


@pytest.fixture
def state(db_path):
    state = AppState.open(db_path)
    yield state
    state.close()


@pytest.fixture
def run():
    """Drive a service coroutine to completion."""
    return asyncio.run


@pytest.fixture
def client(db_path):
    with TestClient(create_app(db_path)) as test_client:
        yield test_client


@pytest.fixture
def auth():
    def _headers(identity):
        return {"Authorization": f"Bearer {create_access_token(identity)}"}

    return _headers
