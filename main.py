import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventlink.config import get_settings
from eventlink.infrastructure.database import engine, initialize_database
from eventlink.infrastructure.notifications import ConnectionRegistry, LiveBroadcaster
from eventlink.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the EventLink FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="EventLink API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One registry per process; pushes never reach sockets held by other instances.
    app.state.registry = ConnectionRegistry()
    app.state.broadcaster = LiveBroadcaster()
    app.state.broadcaster.initialize(app.state.registry.deliver)

    register_routes(app)
    return app


app = create_app()
