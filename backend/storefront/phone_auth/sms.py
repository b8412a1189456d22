# storefront/phone_auth/sms.py
import logging
from dataclasses import dataclass
from typing import Protocol

import requests
from django.conf import settings
from solapi import SolapiMessageService
from solapi.model import RequestMessage

from .phone import mask_phone

logger = logging.getLogger(__name__)


class SmsDispatchError(Exception):
    pass


class SmsDispatcher(Protocol):
    def send(self, phone: str, code: str) -> None:  # pragma: no cover - interface
        ...


@dataclass
class ConsoleDispatcher:
    """Development backend: the code only goes to the log."""

    def send(self, phone: str, code: str) -> None:
        logger.warning("[SMS console] to=%s code=%s", mask_phone(phone), code)


@dataclass
class SmsIrVerifyDispatcher:
    """sms.ir shared-pattern ("verify") endpoint; the template carries a `Code` parameter."""

    api_key: str
    template_id: str
    base_url: str = "https://api.sms.ir/v1"
    timeout: float = 10

    def send(self, phone: str, code: str) -> None:
        if not self.api_key or not self.template_id:
            raise SmsDispatchError("SMSIR_API_KEY / SMSIR_TEMPLATE_ID not set")

        try:
            resp = requests.post(
                f"{self.base_url.rstrip('/')}/send/verify",
                json={
                    "mobile": phone,
                    "templateId": int(self.template_id),
                    "parameters": [{"name": "Code", "value": code}],
                },
                headers={"X-API-KEY": self.api_key, "Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SmsDispatchError(f"SMSIR_REQUEST_FAILED: {e}") from e

        if not resp.ok:
            logger.error("sms.ir HTTP %s: %s", resp.status_code, resp.text[:200])
            raise SmsDispatchError(f"SMSIR_HTTP_{resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise SmsDispatchError("SMSIR_BAD_RESPONSE") from e

        if data.get("status") != 1:
            logger.error("sms.ir rejected message: %s", data)
            raise SmsDispatchError(data.get("message") or "SMSIR_REJECTED")


@dataclass
class SolapiDispatcher:
    api_key: str
    api_secret: str
    from_number: str
    ttl_minutes: int = 3

    def send(self, phone: str, code: str) -> None:
        if not self.api_key or not self.api_secret:
            raise SmsDispatchError("SOLAPI_API_KEY / SOLAPI_API_SECRET not set")
        if not self.from_number:
            raise SmsDispatchError("SOLAPI_FROM_NUMBER not set")

        client = SolapiMessageService(api_key=self.api_key, api_secret=self.api_secret)
        message = RequestMessage(
            from_=self.from_number,
            to=phone,
            text=f"کد تأیید شما: {code}\nاعتبار: {self.ttl_minutes} دقیقه",
        )
        try:
            res = client.send(message)
        except Exception as e:
            raise SmsDispatchError(f"SOLAPI_SEND_FAILED: {e}") from e
        logger.info("solapi send to=%s result=%s", mask_phone(phone), res)


def get_dispatcher() -> SmsDispatcher:
    backend = getattr(settings, "SMS_BACKEND", "console")
    if backend == "smsir":
        return SmsIrVerifyDispatcher(
            api_key=settings.SMSIR_API_KEY,
            template_id=settings.SMSIR_TEMPLATE_ID,
            base_url=settings.SMSIR_BASE_URL,
            timeout=settings.SMS_TIMEOUT_SEC,
        )
    if backend == "solapi":
        return SolapiDispatcher(
            api_key=settings.SOLAPI_API_KEY,
            api_secret=settings.SOLAPI_API_SECRET,
            from_number=settings.SOLAPI_FROM_NUMBER,
            ttl_minutes=max(int(settings.OTP_CODE_TTL.total_seconds() // 60), 1),
        )
    if backend == "console":
        return ConsoleDispatcher()
    raise SmsDispatchError(f"unknown SMS_BACKEND: {backend}")
