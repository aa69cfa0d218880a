"""Health check for load balancers: service status, server time and database reachability."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from authcore.core.config import get_settings
from authcore.core.database import check_db_connected, get_db
from authcore.models.base import utcnow
from authcore.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Report "ok" with the database status; the service answers even when the DB is down."""
    return HealthResponse(
        status="ok",
        timestamp=utcnow(),
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
