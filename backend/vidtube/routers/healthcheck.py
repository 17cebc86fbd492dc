"""Health check router."""

from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidtube.logger import db_logger

router = APIRouter(prefix="/healthcheck")


@router.get("/")
async def healthcheck(request: Request):
    """Detailed health check endpoint."""
    # Test database
    db_status = "connected"
    try:
        with request.app.state.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db_logger.error(f"Health check database error: {e}")
        db_status = "error"

    # Test Redis
    redis_status = "connected" if request.app.state.cache.ping() else "disconnected"

    settings = request.app.state.settings
    return {
        "statusCode": 200,
        "data": {
            "status": "healthy",
            "app": settings.app_name,
            "environment": settings.environment,
            "database": db_status,
            "redis": redis_status,
        },
        "message": "OK",
        "success": True,
    }
