# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + live tracking server reachability.
"""

import requests
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from app.database import get_db
from app.config import settings
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    """
    Returns:
    - Backend status
    - Database connectivity
    - Tracking server reachability (skipped when TRACKING_SERVER_URL is unset)
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "tracking_server": "disabled",
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    if settings.TRACKING_SERVER_URL:
        try:
            resp = requests.get(settings.TRACKING_SERVER_URL, timeout=settings.TRACKING_TIMEOUT_SECONDS)
            result["tracking_server"] = "ok" if resp.status_code < 500 else f"http_{resp.status_code}"
        except requests.exceptions.ConnectionError:
            result["tracking_server"] = "unreachable"
            result["status"] = "degraded"
        except requests.exceptions.RequestException as e:
            result["tracking_server"] = f"error: {str(e)}"

    return result
