# storefront/customer_sessions/authentication.py
from dataclasses import dataclass

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from .services import resolve_session


@dataclass(frozen=True)
class CustomerPrincipal:
    """Identity of a phone-verified customer; request.user for customer endpoints."""

    phone: str

    is_authenticated = True
    is_anonymous = False


def get_raw_token(request):
    """
    Session token from `Authorization: Bearer ...`, falling back to the
    customer_session cookie.
    """
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        token = auth.split(" ", 1)[1].strip()
        if token:
            return token
    return request.COOKIES.get(settings.CUSTOMER_SESSION_COOKIE) or None


class CustomerSessionAuthentication(BaseAuthentication):
    www_authenticate_realm = "customer"

    def authenticate(self, request):
        raw = get_raw_token(request)
        if not raw:
            return None

        phone = resolve_session(raw)
        if not phone:
            raise AuthenticationFailed("invalid or expired session", code="INVALID_SESSION")
        return CustomerPrincipal(phone=phone), raw

    def authenticate_header(self, request):
        return f'Bearer realm="{self.www_authenticate_realm}"'
