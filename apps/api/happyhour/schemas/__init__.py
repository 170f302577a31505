"""Pydantic request/response schemas."""

from happyhour.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MfaSendRequest,
    MfaSendResponse,
    MfaVerifyRequest,
    TokenResponse,
    UserResponse,
)
from happyhour.schemas.bars import (
    HappyHourSummary,
    BarSummary,
    BarView,
    HappyHourEntryInput,
    DraftUpdateRequest,
    MenuAnalysisStatus,
    MenuAnalysisResponse,
    MenuUrlResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "MfaSendRequest",
    "MfaSendResponse",
    "MfaVerifyRequest",
    "TokenResponse",
    "UserResponse",
    "HappyHourSummary",
    "BarSummary",
    "BarView",
    "HappyHourEntryInput",
    "DraftUpdateRequest",
    "MenuAnalysisStatus",
    "MenuAnalysisResponse",
    "MenuUrlResponse",
]
