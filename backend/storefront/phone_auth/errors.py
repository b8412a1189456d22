# storefront/phone_auth/errors.py
from typing import Optional


class PhoneAuthError(Exception):
    code = "PHONE_AUTH_ERROR"
    http_status = 400

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)


class InvalidPhone(PhoneAuthError):
    code = "INVALID_PHONE_NUMBER"


class RateLimited(PhoneAuthError):
    code = "OTP_RATE_LIMITED"
    http_status = 429

    def __init__(self, retry_after: int, message: Optional[str] = None):
        super().__init__(message)
        self.retry_after = max(int(retry_after), 0)


class DispatchFailed(PhoneAuthError):
    code = "SMS_SEND_FAILED"
    http_status = 502


class NotFound(PhoneAuthError):
    code = "OTP_NOT_FOUND"
    http_status = 404


class Expired(PhoneAuthError):
    code = "OTP_EXPIRED"
    http_status = 410


class AttemptsExceeded(PhoneAuthError):
    code = "OTP_TOO_MANY_ATTEMPTS"
    http_status = 429


class InvalidCode(PhoneAuthError):
    code = "OTP_INVALID_CODE"
