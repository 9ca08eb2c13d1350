"""
API Routes
"""
from fastapi import APIRouter, Request

from courier.database import check_connection

router = APIRouter(prefix="/api", tags=["API"])


@router.get("/health")
def health_check(request: Request):
    """Check service health and database connection"""
    return {
        "status": "ok",
        "service": "Courier Records",
        "database": check_connection(request.app.state.engine),
    }
