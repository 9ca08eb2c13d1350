"""
API Routes untuk User Management (admin only)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courier.api.dependencies import get_app_settings, get_db, require_admin
from courier.config import Settings
from courier.schemas import RoleUpdate
from courier.services.auth_service import AuthService

router = APIRouter(prefix="/api/users", tags=["Users"], dependencies=[Depends(require_admin)])


@router.get("", summary="List Users")
def list_users(db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    return AuthService(settings, db).list_users()


@router.put("/{user_id}/role", summary="Update User Role")
def update_role(
    user_id: int,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = AuthService(settings, db).set_role(user_id, data.role)
    return {"message": "User role updated successfully.", "user": user}


@router.delete("/{user_id}", summary="Delete User")
def delete_user(user_id: int, db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    """Hapus user secara permanen. Data yang pernah diinput tidak ikut terhapus."""
    user = AuthService(settings, db).delete_user(user_id)
    return {"message": "User deleted successfully.", "user": user}
