from fastapi import APIRouter, HTTPException, status
import logging

from app.core.config import settings
from app.schemas.auth import AdminLogin, Token
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/admin-login", response_model=Token)
async def admin_login(credentials: AdminLogin) -> Token:
    """
    Exchange the shared admin password for a bearer token.
    Write routes require this token; reads are open.
    """
    token = auth_service.admin_login(credentials.password)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(
        access_token=token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
