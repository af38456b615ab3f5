"""Main FastAPI application for the SimplyTodo backend."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from simplytodo import __version__
from simplytodo.config import Settings
from simplytodo.db.init import init_db
from simplytodo.routers import recurring_rules_router
from simplytodo.utils.logger import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    try:
        init_db()
    except Exception as e:
        logger.warning(f"Database initialization failed: {str(e)}. Database operations may fail.")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.logging_level)

    application = FastAPI(
        title="SimplyTodo API",
        description="Recurring rules and their task instances",
        version=__version__,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    application.include_router(recurring_rules_router, prefix="/api")  # /api/{user_id}/recurring-rules
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "simplytodo.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
