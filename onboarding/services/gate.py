"""Single shared-password gate in front of the submitter form."""
from typing import Optional
from itsdangerous import BadSignature, TimestampSigner
from onboarding.config import settings
from onboarding.errors import AppError
from onboarding.services import auth

COOKIE_NAME = "auth"
COOKIE_VALUE = "ok"

def _signer() -> TimestampSigner:
    return TimestampSigner(settings.COOKIE_SECRET, salt="form-gate")

def max_age_seconds() -> int:
    return settings.COOKIE_MAX_AGE_HOURS * 3600

def check_password(password: str) -> bool:
    if not settings.FORM_PASSWORD_HASH:
        raise AppError("Server not configured")
    return auth.check_password(password or "", settings.FORM_PASSWORD_HASH)

def issue_cookie() -> str:
    return _signer().sign(COOKIE_VALUE).decode("utf-8")

def is_authenticated(cookie: Optional[str]) -> bool:
    if not cookie:
        return False
    try:
        return _signer().unsign(cookie, max_age=max_age_seconds()) == COOKIE_VALUE.encode("utf-8")
    except BadSignature:
        # SignatureExpired is a BadSignature too
        return False
