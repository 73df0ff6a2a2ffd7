from fastapi import APIRouter, HTTPException, Request, status
from datetime import timedelta
import logging

from ...core.config import settings
from ...core.rate_limiter import admin_login_limiter
from ...core.security import ADMIN_ROLE, create_access_token, verify_admin_password
from ...schemas.auth import AdminLoginRequest, TokenResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(login_data: AdminLoginRequest, request: Request):
    """Exchange the admin panel password for a bearer token"""
    admin_login_limiter.check(request)

    if not verify_admin_password(login_data.password):
        admin_login_limiter.record_failure(request)
        logger.warning("Rejected admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    admin_login_limiter.reset(request)
    expires = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token({"sub": ADMIN_ROLE, "role": ADMIN_ROLE}, expires_delta=expires)
    logger.info("Admin logged in")
    return TokenResponse(access_token=token, expires_in=int(expires.total_seconds()))
