"""Sign-in with optional phone second factor."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from happyhour.core import (
    verify_password,
    create_access_token,
    create_mfa_session_token,
    decode_mfa_session_token,
    create_mfa_verification_token,
    decode_mfa_verification_token,
)
from happyhour.db.models import User
from happyhour.providers import get_phone_verifier, PhoneVerificationError
from happyhour.schemas import (
    LoginRequest,
    LoginResponse,
    MfaSendRequest,
    MfaSendResponse,
    MfaVerifyRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def mask_phone(phone: str) -> str:
    """+15551234567 -> +*******4567"""
    digits = phone.strip()
    if len(digits) <= 4:
        return "*" * len(digits)
    prefix = "+" if digits.startswith("+") else ""
    body = digits[len(prefix):]
    return prefix + "*" * (len(body) - 4) + body[-4:]


async def _user_for_mfa(db: AsyncSession, user_id: str | None) -> User:
    user = await db.get(User, user_id) if user_id else None
    if not user or not user.mfa_phone:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign-in session expired. Please sign in again.",
        )
    return user


async def login(db: AsyncSession, body: LoginRequest) -> LoginResponse:
    """Check credentials; users with a phone enrolled get an MFA session instead of a token."""
    email = _normalize_email(body.email)
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Failed to sign in")
    if user.mfa_phone:
        logger.info("Second factor required for user %s", user.id)
        return LoginResponse(
            mfa_required=True,
            mfa_session=create_mfa_session_token(str(user.id)),
            mfa_hints=[mask_phone(user.mfa_phone)],
        )
    return LoginResponse(access_token=create_access_token(subject=str(user.id)))


async def send_mfa_code(db: AsyncSession, body: MfaSendRequest) -> MfaSendResponse:
    user = await _user_for_mfa(db, decode_mfa_session_token(body.mfa_session))
    try:
        verifier = get_phone_verifier()
        await verifier.send_code(user.mfa_phone)
    except PhoneVerificationError:
        logger.warning("Failed to send verification code for user %s", user.id, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to send verification code",
        )
    return MfaSendResponse(verification_id=create_mfa_verification_token(str(user.id)))


async def verify_mfa_code(db: AsyncSession, body: MfaVerifyRequest) -> TokenResponse:
    user = await _user_for_mfa(db, decode_mfa_verification_token(body.verification_id))
    try:
        verifier = get_phone_verifier()
        approved = await verifier.check_code(user.mfa_phone, body.code)
    except PhoneVerificationError:
        logger.warning("Verification check failed for user %s", user.id, exc_info=True)
        approved = False
    if not approved:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid verification code")
    return TokenResponse(access_token=create_access_token(subject=str(user.id)))


class AuthService:
    """Facade for auth operations."""

    @staticmethod
    async def login(db: AsyncSession, body: LoginRequest) -> LoginResponse:
        return await login(db, body)

    @staticmethod
    async def send_mfa_code(db: AsyncSession, body: MfaSendRequest) -> MfaSendResponse:
        return await send_mfa_code(db, body)

    @staticmethod
    async def verify_mfa_code(db: AsyncSession, body: MfaVerifyRequest) -> TokenResponse:
        return await verify_mfa_code(db, body)


auth_service = AuthService()
