"""
Dependencies shared by the API routers: settings, database session and
the authentication gate.
"""
from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from courier.config import Settings
from courier.models import ROLE_ADMIN
from courier.services.auth_service import AuthService

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency untuk mendapatkan database session per request"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Identity claims dari bearer token; AuthError kalau tidak valid"""
    token = credentials.credentials if credentials else None
    return AuthService(settings).authenticate(token)


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    AuthService.require_role(current_user, ROLE_ADMIN)
    return current_user
