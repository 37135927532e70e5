"""Cosmos DB connection bootstrap."""

import logging

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient
from azure.identity.aio import DefaultAzureCredential

from user_api.config import Settings
from user_api.exceptions import StoreConnectionError
from user_api.services.user_store import CosmosUserStore

logger = logging.getLogger(__name__)

USERS_PARTITION_KEY = "/id"


def _is_emulator(endpoint: str) -> bool:
    return "localhost" in endpoint.lower() or "127.0.0.1" in endpoint


def _client_options(settings: Settings) -> dict:
    """Fixed options every Cosmos client in this service is created with."""
    return {
        "consistency_level": "Session",
        "user_agent_suffix": f"{settings.app_name}/{settings.app_version}",
    }


async def connect_user_store(settings: Settings) -> CosmosUserStore:
    """Connect to Cosmos DB and return a ready user store.

    Creates the database and the users container if they don't exist. That
    round trip doubles as the connectivity check. There is no retry: any
    failure is logged and raised as ``StoreConnectionError``.

    Args:
        settings: Application settings

    Returns:
        CosmosUserStore bound to the users container
    """
    endpoint = settings.azure_cosmosdb_endpoint
    if not endpoint:
        logger.error("Database connection error: AZURE_COSMOSDB_ENDPOINT is required")
        raise StoreConnectionError("AZURE_COSMOSDB_ENDPOINT is required")

    # Managed identity when no key is configured
    credential = None
    if settings.azure_cosmosdb_key:
        client = CosmosClient(endpoint, credential=settings.azure_cosmosdb_key, **_client_options(settings))
    else:
        credential = DefaultAzureCredential()
        client = CosmosClient(endpoint, credential=credential, **_client_options(settings))

    try:
        database = await client.create_database_if_not_exists(id=settings.database_name)
        # Emulator requires provisioned throughput
        if _is_emulator(endpoint):
            container = await database.create_container_if_not_exists(
                id=settings.users_container,
                partition_key=PartitionKey(path=USERS_PARTITION_KEY),
                offer_throughput=400,
            )
        else:
            container = await database.create_container_if_not_exists(
                id=settings.users_container,
                partition_key=PartitionKey(path=USERS_PARTITION_KEY),
            )
    except Exception as e:
        logger.error("Database connection error: %s", e)
        await client.close()
        if credential is not None:
            await credential.close()
        raise StoreConnectionError(str(e)) from e

    logger.info(
        "Cosmos DB connected at %s (database '%s', container '%s')",
        endpoint,
        settings.database_name,
        settings.users_container,
    )
    return CosmosUserStore(client, container, credential=credential)
