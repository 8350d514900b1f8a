"""Health check endpoint."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from statusboard.api.dependencies import get_app_settings
from statusboard.config import Settings
from statusboard.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Report service liveness and database connectivity."""
    try:
        db_time = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "ERROR",
                "message": "Database connection failed",
                "error": str(e),
            },
        )

    return jsonable_encoder(
        {
            "status": "OK",
            "message": "Server is running with database!",
            "timestamp": datetime.now(UTC).isoformat(),
            "environment": settings.environment,
            "database": "Connected",
            "dbTime": db_time,
        }
    )
