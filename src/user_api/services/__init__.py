"""Service initialization and dependency injection."""

from fastapi import Request

from user_api.services.cosmos_db_init import connect_user_store
from user_api.services.user_store import CosmosUserStore, UserStore


def get_user_store(request: Request) -> UserStore:
    """Get the user store connected at startup.

    Args:
        request: Incoming request

    Returns:
        UserStore instance held on the application state
    """
    return request.app.state.user_store


__all__ = ["CosmosUserStore", "UserStore", "connect_user_store", "get_user_store"]
