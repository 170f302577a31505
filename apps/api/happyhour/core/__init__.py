"""Core configuration, auth, and shared infrastructure."""

from happyhour.core.config import Settings, get_settings
from happyhour.core.constants import (
    MENU_PREFIX,
    PDF_MEDIA_TYPE,
    PDF_CACHE_CONTROL,
    DEFAULT_HAPPY_HOUR_NAME,
    DEFAULT_DEAL_ITEM,
    DEFAULT_DEAL_DESCRIPTION,
    DEFAULT_DEAL_TEXT,
    SUMMARY_DRINKS_LIMIT,
)
from happyhour.core.auth import (
    verify_password,
    hash_password,
    create_access_token,
    decode_access_token,
    create_mfa_session_token,
    decode_mfa_session_token,
    create_mfa_verification_token,
    decode_mfa_verification_token,
    create_object_token,
    decode_object_token,
)
from happyhour.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "MENU_PREFIX",
    "PDF_MEDIA_TYPE",
    "PDF_CACHE_CONTROL",
    "DEFAULT_HAPPY_HOUR_NAME",
    "DEFAULT_DEAL_ITEM",
    "DEFAULT_DEAL_DESCRIPTION",
    "DEFAULT_DEAL_TEXT",
    "SUMMARY_DRINKS_LIMIT",
    "verify_password",
    "hash_password",
    "create_access_token",
    "decode_access_token",
    "create_mfa_session_token",
    "decode_mfa_session_token",
    "create_mfa_verification_token",
    "decode_mfa_verification_token",
    "create_object_token",
    "decode_object_token",
    "limiter",
]
