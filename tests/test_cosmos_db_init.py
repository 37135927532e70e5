"""Tests for the Cosmos DB connection bootstrap."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.core.exceptions import ServiceRequestError

from user_api.config import Settings
from user_api.exceptions import StoreConnectionError
from user_api.services import cosmos_db_init
from user_api.services.cosmos_db_init import connect_user_store
from user_api.services.user_store import CosmosUserStore

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


@pytest.fixture
def cosmos_client(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the async Cosmos client with a mock returning ``client``."""
    client = MagicMock()
    client.close = AsyncMock()
    database = MagicMock()
    database.create_container_if_not_exists = AsyncMock(return_value=MagicMock(name="container"))
    client.create_database_if_not_exists = AsyncMock(return_value=database)
    client_cls = MagicMock(return_value=client)
    monkeypatch.setattr(cosmos_db_init, "CosmosClient", client_cls)
    client.cls = client_cls
    client.database = database
    return client


async def test_connect_creates_database_and_container(cosmos_client: MagicMock) -> None:
    settings = Settings(
        azure_cosmosdb_endpoint="https://acct.documents.azure.com:443/",
        azure_cosmosdb_key="a2V5",
        database_name="people",
        users_container="members",
    )

    store = await connect_user_store(settings)

    assert isinstance(store, CosmosUserStore)
    args, kwargs = cosmos_client.cls.call_args
    assert args == ("https://acct.documents.azure.com:443/",)
    assert kwargs["credential"] == "a2V5"
    assert kwargs["consistency_level"] == "Session"
    cosmos_client.create_database_if_not_exists.assert_awaited_once_with(id="people")
    container_kwargs = cosmos_client.database.create_container_if_not_exists.await_args.kwargs
    assert container_kwargs["id"] == "members"
    assert container_kwargs["partition_key"].path == "/id"
    assert "offer_throughput" not in container_kwargs


async def test_connect_to_emulator_provisions_throughput(cosmos_client: MagicMock) -> None:
    settings = Settings(azure_cosmosdb_endpoint="https://localhost:8081/", azure_cosmosdb_key="a2V5")

    await connect_user_store(settings)

    container_kwargs = cosmos_client.database.create_container_if_not_exists.await_args.kwargs
    assert container_kwargs["offer_throughput"] == 400


async def test_unreachable_store_raises_and_closes_client(cosmos_client: MagicMock) -> None:
    cosmos_client.create_database_if_not_exists.side_effect = ServiceRequestError("Name or service not known")
    settings = Settings(azure_cosmosdb_endpoint="https://unreachable.invalid:443/", azure_cosmosdb_key="a2V5")

    with pytest.raises(StoreConnectionError) as exc_info:
        await connect_user_store(settings)

    assert "Name or service not known" in exc_info.value.reason
    cosmos_client.close.assert_awaited_once()


async def test_missing_endpoint_is_a_connection_error(cosmos_client: MagicMock) -> None:
    with pytest.raises(StoreConnectionError):
        await connect_user_store(Settings(azure_cosmosdb_endpoint=None))

    cosmos_client.cls.assert_not_called()
