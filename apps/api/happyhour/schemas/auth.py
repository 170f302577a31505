import re

from pydantic import BaseModel, EmailStr, field_validator


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Either a token, or a pending second factor (``mfa_session`` + phone hints)."""

    access_token: str | None = None
    token_type: str = "bearer"
    mfa_required: bool = False
    mfa_session: str | None = None
    mfa_hints: list[str] = []


class MfaSendRequest(BaseModel):
    mfa_session: str


class MfaSendResponse(BaseModel):
    verification_id: str


class MfaVerifyRequest(BaseModel):
    verification_id: str
    code: str

    @field_validator("code")
    @classmethod
    def validate_code(cls, value: str) -> str:
        trimmed = (value or "").strip()
        if not trimmed:
            raise ValueError("Verification code is required")
        if not re.match(r"^\d{4,10}$", trimmed):
            raise ValueError("Verification code must be digits only")
        return trimmed


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: str | None = None
