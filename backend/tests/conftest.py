from datetime import timedelta

import pytest
from rest_framework.test import APIClient

from storefront.phone_auth import services as otp_services


class CapturingDispatcher:
    """Records every (phone, code) instead of sending an SMS."""

    def __init__(self):
        self.sent = []

    def send(self, phone, code):
        self.sent.append((phone, code))


@pytest.fixture(autouse=True)
def _otp_settings(settings):
    settings.SMS_BACKEND = "console"
    settings.OTP_CODE_LENGTH = 6
    settings.OTP_CODE_TTL = timedelta(minutes=5)
    settings.OTP_MAX_ATTEMPTS = 5
    settings.OTP_ISSUE_COOLDOWN = timedelta(seconds=60)
    settings.OTP_SECRET = "test-otp-secret"
    settings.OTP_DEV_MODE = False


@pytest.fixture
def sms(monkeypatch):
    dispatcher = CapturingDispatcher()
    monkeypatch.setattr(otp_services, "get_dispatcher", lambda: dispatcher)
    return dispatcher


@pytest.fixture
def fixed_code(monkeypatch):
    code = "482913"
    monkeypatch.setattr(otp_services, "generate_code", lambda length: code)
    return code


@pytest.fixture
def api():
    return APIClient()
