# storefront/phone_auth/phone.py
import re

from .errors import InvalidPhone

_MOBILE_RE = re.compile(r"^09\d{9}$")


def normalize_phone(raw) -> str:
    # +98 912 123 4567 / 00989121234567 / 9121234567 -> 09121234567
    phone = re.sub(r"[^0-9]", "", str(raw or ""))
    if phone.startswith("0098") and len(phone) == 14:
        phone = phone[2:]
    if phone.startswith("98") and len(phone) == 12:
        phone = "0" + phone[2:]
    elif phone.startswith("9") and len(phone) == 10:
        phone = "0" + phone
    return phone


def require_mobile(raw) -> str:
    """Normalize `raw` and reject anything that is not an Iranian mobile number."""
    phone = normalize_phone(raw)
    if not _MOBILE_RE.match(phone):
        raise InvalidPhone()
    return phone


def mask_phone(phone: str) -> str:
    if not phone or len(phone) < 7:
        return "***"
    return f"{phone[:4]}***{phone[-4:]}"
