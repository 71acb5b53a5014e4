"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from passphrase_auth.api.errors import register_exception_handlers
from passphrase_auth.api.routes import router as auth_router
from passphrase_auth.config import settings
from passphrase_auth.database.engine import init_db

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hook."""
    logger.info("Starting %s …", settings.app_name)
    await init_db()
    logger.info("Database initialised")
    yield
    logger.info("Shutting down %s …", settings.app_name)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Passphrase-based one-time-code login over email",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(auth_router)

    @app.get("/health")
    async def health_check():
        """Simple liveness probe."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
