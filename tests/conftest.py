"""Pytest configuration and fixtures."""

import uuid
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from user_api.config import Settings
from user_api.exceptions import UserNotFoundError
from user_api.main import create_app
from user_api.models.user import User, UserCreate, UserUpdate
from user_api.services import get_user_store
from user_api.services.user_store import UserStore


class InMemoryUserStore(UserStore):
    """UserStore keeping documents in a dict, in insertion order."""

    def __init__(self) -> None:
        self.users: dict[str, dict] = {}
        self.closed = False

    def _doc(self, user_id: str) -> dict:
        if user_id not in self.users:
            raise UserNotFoundError(user_id)
        return self.users[user_id]

    async def list_users(self) -> list[User]:
        return [User(**doc) for doc in self.users.values()]

    async def get_user(self, user_id: str) -> User:
        return User(**self._doc(user_id))

    async def create_user(self, data: UserCreate) -> User:
        doc = {"id": str(uuid.uuid4()), **data.model_dump(mode="json", exclude_none=True)}
        self.users[doc["id"]] = doc
        return User(**doc)

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        doc = self._doc(user_id)
        doc.update(data.changes())
        return User(**doc)

    async def delete_user(self, user_id: str) -> None:
        self._doc(user_id)
        del self.users[user_id]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a store that is never contacted."""
    return Settings(
        environment="test",
        azure_cosmosdb_endpoint="https://localhost:8081/",
        azure_cosmosdb_key="dGVzdA==",
    )


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def app(settings: Settings, user_store: InMemoryUserStore) -> FastAPI:
    """Application with the user store dependency overridden."""
    test_app = create_app(settings)
    test_app.dependency_overrides[get_user_store] = lambda: user_store
    return test_app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a FastAPI test client.

    Not entered as a context manager, so the lifespan never connects to
    Cosmos DB.
    """
    yield TestClient(app)
