# school_directory/__init__.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging

from .core.config import settings, get_upload_folder
from .core.database import init_db, close_db
from .core.errors import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routes import index_router, schools_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="API for registering schools and browsing the school directory",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(index_router)
    app.include_router(schools_router, prefix="/api")

    # Uploaded images are served read-only
    app.mount(
        settings.STATIC_URL_PATH,
        StaticFiles(directory=get_upload_folder()),
        name="school_images"
    )

    @app.on_event("startup")
    async def startup_event():
        await init_db()
        logger.info("Application startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        await close_db()
        logger.info("Application shutdown completed")

    return app
