"""
API Routes untuk Authentication
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courier.api.dependencies import get_app_settings, get_current_user, get_db
from courier.config import Settings
from courier.schemas import UserRegister, UserLogin
from courier.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/register", status_code=201, summary="Register User Baru")
def register(
    data: UserRegister,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register user baru.

    User pertama yang mendaftar otomatis menjadi **admin**,
    pendaftar berikutnya menjadi **user**.
    """
    result = AuthService(settings, db).register(data.username, data.password)
    return {
        "message": f"User registered successfully as {result['role']}",
        **result,
    }


@router.post("/login", summary="Login")
def login(
    data: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Login dan dapatkan token.

    Returns bearer token yang berlaku 24 jam.
    """
    return AuthService(settings, db).login(data.username, data.password)


@router.get("/me", summary="Get Current User")
def get_me(current_user: dict = Depends(get_current_user)):
    """Identity dari token yang sedang dipakai"""
    return current_user
