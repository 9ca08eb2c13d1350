"""
Authentication Service - Register, Login, Token Management, User Admin
"""
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Dict, Any, List

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from courier.config import Settings
from courier.errors import AuthError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from courier.models import User, ROLE_ADMIN, ROLE_USER, ROLES

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
TOKEN_CLAIMS = ("id", "username", "role")


@lru_cache()
def _crypt_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class AuthService:
    """Service untuk authentication dan manajemen user"""

    def __init__(self, settings: Settings, db: Optional[Session] = None):
        self.settings = settings
        self.db = db
        self.pwd_context = _crypt_context(settings.bcrypt_rounds)

    # ==================== PASSWORD ====================

    def hash_password(self, password: str) -> str:
        """Hash password dengan bcrypt"""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verifikasi password"""
        return self.pwd_context.verify(plain_password, hashed_password)

    # ==================== TOKEN ====================

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Buat JWT access token"""
        to_encode = data.copy()
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.settings.access_token_expire_minutes)
        to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
        return jwt.encode(to_encode, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)

    def decode_token(self, token: str) -> Optional[dict]:
        """Decode JWT token, None when invalid or expired"""
        try:
            return jwt.decode(token, self.settings.jwt_secret, algorithms=[self.settings.jwt_algorithm])
        except JWTError:
            return None

    def authenticate(self, token: Optional[str]) -> Dict[str, Any]:
        """Validate a bearer token and return its identity claims"""
        if not token:
            raise AuthError("Not authorized, no token")
        payload = self.decode_token(token)
        if not payload or any(payload.get(claim) is None for claim in TOKEN_CLAIMS):
            raise AuthError("Not authorized, token failed")
        return {claim: payload[claim] for claim in TOKEN_CLAIMS}

    @staticmethod
    def require_role(identity: Dict[str, Any], role: str) -> None:
        if identity.get("role") != role:
            raise ForbiddenError(f"Forbidden. {role.capitalize()} access required.")

    # ==================== REGISTER / LOGIN ====================

    def register(self, username: str, password: str) -> Dict[str, str]:
        """Register user baru; user pertama otomatis menjadi admin"""
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Please provide username and password")

        existing = self.db.query(User).filter(User.username == username).first()
        if existing:
            raise ConflictError("Username already exists")

        # Not serialised against concurrent first registrations
        role = ROLE_ADMIN if self.db.query(User).count() == 0 else ROLE_USER

        user = User(username=username, password=self.hash_password(password), role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Username already exists")

        logger.info("[Auth] Registered user %s as %s", username, role)
        return {"username": username, "role": role}

    def login(self, username: str, password: str) -> Dict[str, str]:
        """Login user dan return token"""
        user = self.db.query(User).filter(User.username == (username or "").strip()).first()

        if user is None:
            # Keep timing close to a real verify
            self.pwd_context.dummy_verify()
            logger.info("[Auth] Failed login for %s", username)
            raise AuthError(INVALID_CREDENTIALS)

        if not password or not self.verify_password(password, user.password):
            logger.info("[Auth] Failed login for %s", username)
            raise AuthError(INVALID_CREDENTIALS)

        token = self.create_access_token(
            data={"id": user.id, "username": user.username, "role": user.role}
        )
        return {"token": token, "username": user.username, "role": user.role}

    # ==================== USER ADMIN ====================

    def list_users(self) -> List[Dict[str, Any]]:
        return [u.to_dict() for u in self.db.query(User).order_by(User.id).all()]

    def _get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def set_role(self, user_id: int, role: str) -> Dict[str, Any]:
        """Ubah role user (admin only)"""
        if role not in ROLES:
            raise ValidationError("Invalid role specified.")
        user = self._get_user(user_id)
        user.role = role
        self.db.commit()
        logger.info("[Auth] Role of %s set to %s", user.username, role)
        return user.to_dict()

    def delete_user(self, user_id: int) -> Dict[str, Any]:
        """Hapus user; data pickup/delivery miliknya tetap ada"""
        user = self._get_user(user_id)
        deleted = user.to_dict()
        self.db.delete(user)
        self.db.commit()
        logger.info("[Auth] Deleted user %s", deleted["username"])
        return deleted
