import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt

from happyhour.core.config import get_settings


_MAX_BCRYPT_BYTES = 72  # bcrypt limit

PURPOSE_ACCESS = "access"
PURPOSE_MFA_SESSION = "mfa_session"
PURPOSE_MFA_VERIFICATION = "mfa_verification"
PURPOSE_OBJECT = "object"


def verify_password(plain: str, hashed: str) -> bool:
    try:
        pwd_bytes = plain.encode("utf-8")[:_MAX_BCRYPT_BYTES]
        return bcrypt.checkpw(pwd_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def hash_password(password: str) -> str:
    pwd_bytes = password.encode("utf-8")[:_MAX_BCRYPT_BYTES]
    return bcrypt.hashpw(pwd_bytes, bcrypt.gensalt()).decode("utf-8")


def _encode(subject: str, purpose: str, expire_minutes: int) -> str:
    s = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
    to_encode = {"sub": subject, "purpose": purpose, "exp": expire}
    return jwt.encode(to_encode, s.jwt_secret, algorithm=s.jwt_algorithm)


def _decode(token: str, purpose: str) -> Optional[str]:
    s = get_settings()
    try:
        payload = jwt.decode(token, s.jwt_secret, algorithms=[s.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("purpose") != purpose:
        return None
    sub = payload.get("sub")
    return str(sub) if sub is not None else None


def create_access_token(subject: str) -> str:
    return _encode(subject, PURPOSE_ACCESS, get_settings().jwt_expire_minutes)


def decode_access_token(token: str) -> Optional[str]:
    return _decode(token, PURPOSE_ACCESS)


def create_mfa_session_token(user_id: str) -> str:
    """Short-lived token standing in for the multi-factor resolver between login and verify."""
    return _encode(user_id, PURPOSE_MFA_SESSION, get_settings().mfa_session_expire_minutes)


def decode_mfa_session_token(token: str) -> Optional[str]:
    return _decode(token, PURPOSE_MFA_SESSION)


def create_mfa_verification_token(user_id: str) -> str:
    """Issued once a code was sent; the code can only be checked against this id."""
    return _encode(user_id, PURPOSE_MFA_VERIFICATION, get_settings().mfa_session_expire_minutes)


def decode_mfa_verification_token(token: str) -> Optional[str]:
    return _decode(token, PURPOSE_MFA_VERIFICATION)


def create_object_token(path: str, expire_minutes: int | None = None) -> str:
    """Token for a stored object URL so the browser can open it without Bearer."""
    minutes = expire_minutes if expire_minutes is not None else get_settings().menu_url_expire_minutes
    return _encode(path, PURPOSE_OBJECT, minutes)


def decode_object_token(token: str) -> Optional[str]:
    return _decode(token, PURPOSE_OBJECT)
