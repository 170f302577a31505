from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from happyhour.core import limiter
from happyhour.db.session import get_db
from happyhour.schemas import (
    LoginRequest,
    LoginResponse,
    MfaSendRequest,
    MfaSendResponse,
    MfaVerifyRequest,
    TokenResponse,
)
from happyhour.services.auth import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.login(db, body)


@router.post("/mfa/send", response_model=MfaSendResponse)
@limiter.limit("5/minute")
async def send_mfa_code(
    request: Request,
    body: MfaSendRequest,
    db: AsyncSession = Depends(get_db),
):
    """Text a verification code to the phone enrolled for the pending sign-in."""
    return await auth_service.send_mfa_code(db, body)


@router.post("/mfa/verify", response_model=TokenResponse)
@limiter.limit("10/minute")
async def verify_mfa_code(
    request: Request,
    body: MfaVerifyRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.verify_mfa_code(db, body)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout():
    """Tokens are stateless; the client drops its token. Safe to call repeatedly."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
