"""Main FastAPI application."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from user_api.config import Settings, get_settings
from user_api.middleware import setup_middleware
from user_api.routes import api_router
from user_api.services import connect_user_store

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from the settings log level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Assemble the application: middleware, user routes, error handlers.

    Args:
        settings: Application settings, loaded from the environment if omitted

    Returns:
        FastAPI application whose lifespan connects the user store
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Connect the user store before serving and close it on shutdown."""
        logger.info("%s v%s starting", settings.app_name, settings.app_version)
        logger.info("Environment: %s", settings.environment)

        # Failure propagates and aborts startup before the socket is bound
        app.state.user_store = await connect_user_store(settings)

        yield

        logger.info("%s shutting down", settings.app_name)
        await app.state.user_store.close()

    app = FastAPI(
        title=settings.app_name,
        description="CRUD API for user documents",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings

    setup_middleware(app)
    app.include_router(api_router)

    return app


app = create_app()


class UserApiServer(uvicorn.Server):
    """uvicorn server that logs the bound address once it is listening."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started and self.servers:
            host, port = self.servers[0].sockets[0].getsockname()[:2]
            logger.info("Server running on http://%s:%s", host, port)


def main() -> None:
    """Run the API server, exiting with status 1 if startup fails."""
    settings = get_settings()
    server = UserApiServer(
        uvicorn.Config(
            create_app(settings),
            host=settings.api_host,
            port=settings.api_port,
            log_level=settings.log_level.lower(),
        )
    )
    try:
        server.run()
    except SystemExit:
        # uvicorn exits with its own status when startup fails
        if server.started:
            raise

    if not server.started:
        logger.error("%s failed to start", settings.app_name)
        sys.exit(1)


if __name__ == "__main__":
    main()
