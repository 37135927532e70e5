"""User store with Cosmos DB implementation."""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any

from azure.cosmos.aio import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from user_api.exceptions import UserNotFoundError
from user_api.models.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


class UserStore(ABC):
    """Abstract interface for user persistence.

    Lookups by ID raise ``UserNotFoundError`` when the document does not
    exist. Any other store failure propagates unchanged.
    """

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List all users."""

    @abstractmethod
    async def get_user(self, user_id: str) -> User:
        """Get a user by ID."""

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User:
        """Create a user and assign its ID."""

    @abstractmethod
    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Apply the fields set in ``data`` to an existing user."""

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        """Delete a user."""

    async def close(self) -> None:
        """Release any connection held by the store."""


def _to_user(doc: dict[str, Any]) -> User:
    return User.model_validate({k: v for k, v in doc.items() if k not in COSMOS_SYSTEM_FIELDS})


class CosmosUserStore(UserStore):
    """Cosmos DB implementation of UserStore.

    Users are stored one document per user in a container partitioned on
    ``/id``, so every point operation uses the user ID as partition key.
    """

    def __init__(self, client: CosmosClient, container: ContainerProxy, credential: Any = None) -> None:
        """Initialize the store.

        Args:
            client: Connected async Cosmos client, owned by the store
            container: Users container
            credential: Async credential to close with the client, if any
        """
        self.client = client
        self.container = container
        self.credential = credential

    async def list_users(self) -> list[User]:
        """List all users."""
        items = [item async for item in self.container.query_items(query="SELECT * FROM c")]
        logger.debug("Queried %d users", len(items))
        return [_to_user(item) for item in items]

    async def get_user(self, user_id: str) -> User:
        """Get a user by ID."""
        try:
            doc = await self.container.read_item(item=user_id, partition_key=user_id)
        except CosmosResourceNotFoundError as e:
            raise UserNotFoundError(user_id) from e
        return _to_user(doc)

    async def create_user(self, data: UserCreate) -> User:
        """Create a user and assign its ID."""
        body = {"id": str(uuid.uuid4()), **data.model_dump(mode="json", exclude_none=True)}
        created = await self.container.create_item(body=body)
        logger.info("Created user %s", created["id"])
        return _to_user(created)

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Apply the fields set in ``data`` to an existing user.

        Uses a single patch call; an empty update is a plain read.
        """
        changes = data.changes()
        if not changes:
            return await self.get_user(user_id)

        operations = [{"op": "set", "path": f"/{field}", "value": value} for field, value in changes.items()]
        try:
            updated = await self.container.patch_item(
                item=user_id,
                partition_key=user_id,
                patch_operations=operations,
            )
        except CosmosResourceNotFoundError as e:
            raise UserNotFoundError(user_id) from e
        logger.info("Updated user %s fields=%s", user_id, sorted(changes))
        return _to_user(updated)

    async def delete_user(self, user_id: str) -> None:
        """Delete a user."""
        try:
            await self.container.delete_item(item=user_id, partition_key=user_id)
        except CosmosResourceNotFoundError as e:
            raise UserNotFoundError(user_id) from e
        logger.info("Deleted user %s", user_id)

    async def close(self) -> None:
        """Close the Cosmos client and its credential."""
        await self.client.close()
        if self.credential is not None:
            await self.credential.close()
