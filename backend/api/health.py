"""
Health check endpoint
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from constants import APP_VERSION, ApiPaths, HTTPStatus
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(ApiPaths.HEALTH)
def health_check(db: Session = Depends(get_db)):
    """Report service status and whether the database answers."""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
        status_code = HTTPStatus.OK
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        database = "unavailable"
        status_code = HTTPStatus.SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "healthy" if status_code == HTTPStatus.OK else "unhealthy",
            "database": database,
            "version": APP_VERSION,
        }
    )
