# storefront/phone_auth/conf.py
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings


@dataclass(frozen=True)
class OtpPolicy:
    code_length: int
    code_ttl: timedelta
    max_attempts: int
    issue_cooldown: timedelta
    secret: str


def otp_policy() -> OtpPolicy:
    # read on every call so override_settings / monkeypatch apply
    return OtpPolicy(
        code_length=int(getattr(settings, "OTP_CODE_LENGTH", 6)),
        code_ttl=getattr(settings, "OTP_CODE_TTL", timedelta(minutes=5)),
        max_attempts=int(getattr(settings, "OTP_MAX_ATTEMPTS", 5)),
        issue_cooldown=getattr(settings, "OTP_ISSUE_COOLDOWN", timedelta(seconds=60)),
        secret=getattr(settings, "OTP_SECRET", None) or settings.SECRET_KEY,
    )
