from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from vidtube.config import Settings, get_settings
from vidtube.database import build_engine, build_session_factory
from vidtube.exception_handlers import register_exception_handlers
from vidtube.logger import app_logger, configure_logging, db_logger, redis_logger
from vidtube.redis_client import RedisClient
from vidtube.routers import (
    comments,
    dashboard,
    healthcheck,
    likes,
    playlists,
    subscriptions,
    tweets,
    users,
    videos,
)
from vidtube.storage import create_asset_host


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Settings are threaded through app.state together with the engine,
    session factory, asset host and cache built from them.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production else None,
        redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production else None,
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.asset_host = create_asset_host(settings)
    app.state.cache = RedisClient(settings.redis_url, enabled=settings.cache_enabled)

    # Configure CORS for local and production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["*"],
        expose_headers=["*"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Add trusted host middleware in production for additional security
    if settings.is_production:
        trusted_hosts = [
            origin.replace("https://", "").replace("http://", "")
            for origin in settings.cors_origins
        ]
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

    register_exception_handlers(app)

    # Include routers
    app.include_router(healthcheck.router, prefix=settings.api_prefix, tags=["Health"])
    app.include_router(users.router, prefix=settings.api_prefix, tags=["Users"])
    app.include_router(videos.router, prefix=settings.api_prefix, tags=["Videos"])
    app.include_router(comments.router, prefix=settings.api_prefix, tags=["Comments"])
    app.include_router(likes.router, prefix=settings.api_prefix, tags=["Likes"])
    app.include_router(tweets.router, prefix=settings.api_prefix, tags=["Tweets"])
    app.include_router(playlists.router, prefix=settings.api_prefix, tags=["Playlists"])
    app.include_router(
        subscriptions.router, prefix=settings.api_prefix, tags=["Subscriptions"]
    )
    app.include_router(dashboard.router, prefix=settings.api_prefix, tags=["Dashboard"])

    # Locally stored assets are served by the app itself
    if settings.asset_backend == "local":
        app.mount("/assets", StaticFiles(directory=settings.asset_root), name="assets")

    @app.on_event("startup")
    async def startup_event():
        """Run on application startup."""
        app_logger.info(f"Starting {settings.app_name}")
        app_logger.info(f"Environment: {settings.environment}")
        app_logger.info(f"Debug mode: {settings.debug}")

        # Test database connection
        try:
            with engine.connect():
                db_logger.info("Database connection successful")
        except SQLAlchemyError as e:
            db_logger.error(f"Database connection failed: {e}")

        if app.state.cache.client:
            redis_logger.info("Redis connection successful")
        else:
            redis_logger.warning("Redis not available (caching disabled)")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run on application shutdown."""
        app_logger.info("Shutting down application")
        app.state.cache.close()
        engine.dispose()

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "environment": settings.environment,
        }

    return app


app = create_app()
