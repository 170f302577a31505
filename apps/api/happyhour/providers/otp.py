"""Phone second factor for dashboard sign-in, backed by Twilio Verify.

Twilio keeps the code; we only ask it to text one to the enrolled phone and
later ask whether the code the owner typed matches.
"""

import logging
from functools import lru_cache
from typing import Any

import httpx

from happyhour.core import get_settings

logger = logging.getLogger(__name__)

TWILIO_VERIFY_URL = "https://verify.twilio.com/v2/Services"


class PhoneVerificationError(Exception):
    """Raised when a sign-in code could not be sent or checked."""


class PhoneVerificationRateLimitError(PhoneVerificationError):
    """Raised when Twilio throttles codes for a phone."""


class PhoneVerificationConfigError(PhoneVerificationError):
    """Raised when Twilio Verify credentials are not configured."""


class TwilioPhoneVerifier:
    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        service_sid: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.auth = (account_sid, auth_token)
        self.service_url = f"{TWILIO_VERIFY_URL}/{service_sid}"
        self.timeout = timeout
        self.transport = transport

    async def _call(self, resource: str, form: dict[str, Any]) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(f"{self.service_url}/{resource}", data=form, auth=self.auth)
                if r.status_code == 429:
                    raise PhoneVerificationRateLimitError("Too many sign-in codes requested for this phone.")
                r.raise_for_status()
                return r.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Twilio Verify %s failed with %s: %s", resource, e.response.status_code, e.response.text[:500])
            raise PhoneVerificationError(f"Twilio Verify {resource} returned {e.response.status_code}.") from e
        except httpx.RequestError as e:
            raise PhoneVerificationError("Twilio Verify unreachable.") from e
        except ValueError as e:
            raise PhoneVerificationError(f"Twilio Verify {resource} returned invalid JSON.") from e

    async def send_code(self, phone: str) -> None:
        """Text a sign-in code to ``phone``."""
        await self._call("Verifications", {"To": phone, "Channel": "sms"})

    async def check_code(self, phone: str, code: str) -> bool:
        """True when Twilio approves ``code`` for ``phone``."""
        data = await self._call("VerificationCheck", {"To": phone, "Code": code})
        return data.get("valid") is True or str(data.get("status", "")).lower() == "approved"


@lru_cache
def get_phone_verifier() -> TwilioPhoneVerifier:
    s = get_settings()
    if not (s.twilio_account_sid and s.twilio_auth_token and s.twilio_verify_service_sid):
        raise PhoneVerificationConfigError("Phone sign-in codes are not configured.")
    return TwilioPhoneVerifier(
        account_sid=s.twilio_account_sid,
        auth_token=s.twilio_auth_token,
        service_sid=s.twilio_verify_service_sid,
    )
