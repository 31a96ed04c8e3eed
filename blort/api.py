from fastapi import FastAPI

from blort.database.config import get_settings
from blort.database.database import get_engine, init_db
from blort.routes.hello import hello_route
from blort.routes.home import home_route
from blort.services.logging.logging import get_logger

logger = get_logger(logger_name=__name__)


def create_application() -> FastAPI:
    """
    Creates and configures the FastAPI application.

    Returns:
        FastAPI: Configured application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc"
    )

    app.include_router(home_route, tags=['Home'])
    app.include_router(hello_route, tags=['Hello'])

    @app.on_event("startup")
    def on_startup():
        try:
            logger.info("Initializing database...")
            init_db(get_engine())
            logger.info("Application started")
        except Exception as e:
            logger.error(f"Startup failed: {str(e)}")
            raise

    return app
