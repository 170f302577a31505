import httpx
import pytest
from fastapi import HTTPException

from happyhour.core import (
    Settings,
    create_access_token,
    create_mfa_session_token,
    create_mfa_verification_token,
    create_object_token,
    decode_access_token,
    decode_mfa_session_token,
    decode_object_token,
    hash_password,
    verify_password,
)
from happyhour.db.models import User
from happyhour.providers import (
    PhoneVerificationConfigError,
    PhoneVerificationRateLimitError,
    TwilioPhoneVerifier,
    get_phone_verifier,
)
from happyhour.providers import otp as otp_module
from happyhour.schemas import LoginRequest, MfaSendRequest, MfaVerifyRequest
from happyhour.services import auth as auth_module
from happyhour.services.auth import login, mask_phone, send_mfa_code, verify_mfa_code

PASSWORD = "SeedPassword123!"


class FakeResult:
    def __init__(self, value):
        self.value = value

    def scalar_one_or_none(self):
        return self.value


class FakeDb:
    """Just enough of AsyncSession for the auth service: one user, looked up by id or email."""

    def __init__(self, user: User | None):
        self.user = user

    async def execute(self, statement):
        return FakeResult(self.user)

    async def get(self, model, ident):
        if self.user is not None and str(self.user.id) == str(ident):
            return self.user
        return None


def make_user(mfa_phone: str | None = None) -> User:
    return User(
        id="user-1",
        email="owner@example.com",
        hashed_password=hash_password(PASSWORD),
        display_name="Owner",
        mfa_phone=mfa_phone,
    )


def twilio_with(handler) -> TwilioPhoneVerifier:
    return TwilioPhoneVerifier("AC123", "secret", "VA123", transport=httpx.MockTransport(handler))


def test_password_hashing():
    hashed = hash_password(PASSWORD)
    assert verify_password(PASSWORD, hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password(PASSWORD, "not-a-hash")


def test_tokens_are_bound_to_their_purpose():
    assert decode_access_token(create_access_token("user-1")) == "user-1"
    assert decode_access_token(create_mfa_session_token("user-1")) is None
    assert decode_mfa_session_token(create_access_token("user-1")) is None
    assert decode_object_token(create_object_token("happyHourMenu/hh-1.pdf")) == "happyHourMenu/hh-1.pdf"
    assert decode_access_token("garbage") is None


def test_mask_phone():
    assert mask_phone("+15551234567") == "+*******4567"
    assert mask_phone("123") == "***"


async def test_login_without_mfa_returns_token():
    result = await login(FakeDb(make_user()), LoginRequest(email="Owner@Example.com", password=PASSWORD))
    assert not result.mfa_required
    assert decode_access_token(result.access_token) == "user-1"


async def test_login_failure_is_generic():
    with pytest.raises(HTTPException) as exc:
        await login(FakeDb(make_user()), LoginRequest(email="owner@example.com", password="wrong"))
    assert exc.value.status_code == 401
    assert exc.value.detail == "Failed to sign in"

    with pytest.raises(HTTPException) as exc:
        await login(FakeDb(None), LoginRequest(email="nobody@example.com", password=PASSWORD))
    assert exc.value.detail == "Failed to sign in"


async def test_login_with_mfa_returns_session_and_hint():
    result = await login(FakeDb(make_user("+15551234567")), LoginRequest(email="owner@example.com", password=PASSWORD))
    assert result.mfa_required
    assert result.access_token is None
    assert result.mfa_hints == ["+*******4567"]
    assert decode_mfa_session_token(result.mfa_session) == "user-1"


async def test_mfa_send_and_verify(monkeypatch):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.url.path, request.read().decode()))
        if request.url.path.endswith("/Verifications"):
            return httpx.Response(201, json={"status": "pending"})
        return httpx.Response(200, json={"status": "approved", "valid": True})

    monkeypatch.setattr(auth_module, "get_phone_verifier", lambda: twilio_with(handler))
    db = FakeDb(make_user("+15551234567"))

    sent = await send_mfa_code(db, MfaSendRequest(mfa_session=create_mfa_session_token("user-1")))
    token = await verify_mfa_code(db, MfaVerifyRequest(verification_id=sent.verification_id, code="123456"))

    assert decode_access_token(token.access_token) == "user-1"
    assert calls[0][0] == "/v2/Services/VA123/Verifications"
    assert "Channel=sms" in calls[0][1]
    assert calls[1][0] == "/v2/Services/VA123/VerificationCheck"
    assert "Code=123456" in calls[1][1]


async def test_mfa_wrong_code(monkeypatch):
    provider = twilio_with(lambda request: httpx.Response(200, json={"status": "pending", "valid": False}))
    monkeypatch.setattr(auth_module, "get_phone_verifier", lambda: provider)
    db = FakeDb(make_user("+15551234567"))

    with pytest.raises(HTTPException) as exc:
        await verify_mfa_code(
            db,
            MfaVerifyRequest(verification_id=create_mfa_verification_token("user-1"), code="000000"),
        )
    assert exc.value.status_code == 401
    assert exc.value.detail == "Invalid verification code"


async def test_mfa_send_failure(monkeypatch):
    provider = twilio_with(lambda request: httpx.Response(500, text="down"))
    monkeypatch.setattr(auth_module, "get_phone_verifier", lambda: provider)

    with pytest.raises(HTTPException) as exc:
        await send_mfa_code(
            FakeDb(make_user("+15551234567")),
            MfaSendRequest(mfa_session=create_mfa_session_token("user-1")),
        )
    assert exc.value.status_code == 503


async def test_mfa_verify_rejects_session_token():
    with pytest.raises(HTTPException) as exc:
        await verify_mfa_code(
            FakeDb(make_user("+15551234567")),
            MfaVerifyRequest(verification_id=create_mfa_session_token("user-1"), code="123456"),
        )
    assert exc.value.status_code == 401


def test_verification_code_must_be_digits():
    with pytest.raises(ValueError):
        MfaVerifyRequest(verification_id="x", code="12ab")


async def test_phone_verifier_rate_limited():
    verifier = twilio_with(lambda request: httpx.Response(429, json={"code": 60203}))
    with pytest.raises(PhoneVerificationRateLimitError):
        await verifier.send_code("+15551234567")


def test_phone_verifier_requires_credentials(monkeypatch):
    monkeypatch.setattr(otp_module, "get_settings", lambda: Settings(twilio_account_sid=None))
    get_phone_verifier.cache_clear()
    try:
        with pytest.raises(PhoneVerificationConfigError):
            get_phone_verifier()
    finally:
        get_phone_verifier.cache_clear()
