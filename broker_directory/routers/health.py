import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas
from ..cache import get_cache
from ..config import API_VERSION
from ..db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=schemas.HealthOut)
def health():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "ok", "timestamp": timestamp, "version": API_VERSION}


@router.get("/ready")
def ready(db: Session = Depends(get_db), cache=Depends(get_cache)):
    try:
        db.execute(text("SELECT 1"))
        if cache is not None:
            cache.ping()
    except (SQLAlchemyError, RedisError) as exc:
        logger.warning("readiness check failed: %s", exc)
        return {"ready": False}
    return {"ready": True}
