"""
Authentication service for the shared admin password and JWT tokens
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional
from jose import jwt, JWTError

from app.core.config import settings

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


class AuthService:
    """Admin gate: one shared password exchanged for a bearer token"""

    def __init__(self):
        self.algorithm = settings.ALGORITHM
        self.secret_key = settings.SECRET_KEY
        self.access_token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def verify_admin_password(self, password: str) -> bool:
        """Constant-time comparison against the configured admin password"""
        return secrets.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.access_token_expire_minutes)

        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> Optional[dict]:
        """Decode and validate a JWT access token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def admin_login(self, password: str) -> Optional[str]:
        """Token for a correct admin password, None otherwise"""
        if not self.verify_admin_password(password):
            logger.warning("Admin login failed: wrong password")
            return None
        logger.info("Admin login succeeded")
        return self.create_access_token({"sub": ADMIN_SUBJECT, "role": "admin"})

    def is_admin_token(self, token: str) -> bool:
        payload = self.decode_access_token(token)
        return bool(payload) and payload.get("sub") == ADMIN_SUBJECT


auth_service = AuthService()
