from .analysis import (
    AnalysisServiceError,
    AnalysisConfigError,
    MenuAnalysis,
    PdfAnalysisProvider,
    get_analysis_provider,
)
from .otp import (
    PhoneVerificationError,
    PhoneVerificationRateLimitError,
    PhoneVerificationConfigError,
    TwilioPhoneVerifier,
    get_phone_verifier,
)

__all__ = [
    "AnalysisServiceError",
    "AnalysisConfigError",
    "MenuAnalysis",
    "PdfAnalysisProvider",
    "get_analysis_provider",
    "PhoneVerificationError",
    "PhoneVerificationRateLimitError",
    "PhoneVerificationConfigError",
    "TwilioPhoneVerifier",
    "get_phone_verifier",
]
