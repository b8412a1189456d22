# storefront/customer_sessions/services.py
import logging
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import Token

from .models import CustomerSession

logger = logging.getLogger(__name__)


class CustomerSessionToken(Token):
    """HS256 JWT carrying the verified phone; the jti ties it to a CustomerSession row."""

    token_type = "customer_session"

    @property
    def lifetime(self):
        return settings.CUSTOMER_SESSION_TTL


def session_ttl():
    return settings.CUSTOMER_SESSION_TTL


def create_session(phone: str, *, now: Optional[datetime] = None) -> str:
    """
    Mint a session for an already verified phone.

    Only the OTP verify view may call this, and only after validate_otp succeeded.
    """
    now = now or timezone.now()
    ttl = session_ttl()

    token = CustomerSessionToken()
    token["phone"] = phone
    token.set_exp(from_time=now, lifetime=ttl)

    CustomerSession.objects.create(
        jti=token["jti"],
        phone=phone,
        created_at=now,
        expires_at=now + ttl,
    )
    return str(token)


def _decode(raw: str) -> Optional[CustomerSessionToken]:
    if not raw:
        return None
    try:
        return CustomerSessionToken(raw)
    except TokenError:
        return None


def resolve_session(raw: str, *, now: Optional[datetime] = None) -> Optional[str]:
    """Phone bound to the token, or None when it is invalid, expired or revoked."""
    token = _decode(raw)
    if token is None:
        return None

    session = CustomerSession.objects.filter(jti=token.get("jti")).first()
    if session is None or not session.is_active(now):
        return None
    if session.phone != token.get("phone"):
        return None
    return session.phone


def clear_session(raw: str, *, now: Optional[datetime] = None) -> None:
    token = _decode(raw)
    if token is None:
        return
    revoked = CustomerSession.objects.filter(
        jti=token.get("jti"), revoked_at__isnull=True
    ).update(revoked_at=now or timezone.now())
    if revoked:
        logger.info("customer session %s revoked", token.get("jti"))


def purge_expired_sessions(now: Optional[datetime] = None) -> int:
    deleted, _ = CustomerSession.objects.filter(expires_at__lt=now or timezone.now()).delete()
    return deleted
