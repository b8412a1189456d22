# storefront/phone_auth/views.py
from django.conf import settings

from rest_framework.views import APIView

from storefront.common.responses import ok, fail
from storefront.customer_sessions.authentication import get_raw_token
from storefront.customer_sessions.services import (
    clear_session,
    create_session,
    session_ttl,
)

from .conf import otp_policy
from .errors import (
    AttemptsExceeded,
    DispatchFailed,
    Expired,
    InvalidCode,
    InvalidPhone,
    NotFound,
    PhoneAuthError,
    RateLimited,
)
from .serializers import PhoneRequestSerializer, PhoneVerifySerializer
from .services import issue_otp, validate_otp

# user-facing messages; the error code tells the client whether to retry,
# wait, or request a new code
MESSAGES = {
    InvalidPhone: "شماره موبایل نامعتبر است",
    RateLimited: "لطفاً کمی صبر کنید و دوباره تلاش کنید",
    DispatchFailed: "خطا در ارسال پیامک. لطفاً دوباره تلاش کنید.",
    NotFound: "کد تأیید یافت نشد. لطفاً دوباره درخواست کنید.",
    Expired: "کد تأیید منقضی شده است. لطفاً دوباره درخواست کنید.",
    AttemptsExceeded: "تعداد تلاش‌ها بیش از حد مجاز است. لطفاً کد جدید درخواست کنید.",
    InvalidCode: "کد وارد شده نادرست است",
}


def _fail_from(exc: PhoneAuthError):
    extra = {}
    if isinstance(exc, RateLimited):
        extra["retryAfter"] = exc.retry_after
    message = MESSAGES.get(type(exc), "خطایی رخ داد. لطفاً دوباره تلاش کنید.")
    return fail(exc.code, message, exc.http_status, **extra)


def _validation_fail(serializer):
    return fail("VALIDATION_ERROR", "invalid request", fields=serializer.errors)


class PhoneOtpRequestView(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        serializer = PhoneRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_fail(serializer)

        try:
            record = issue_otp(serializer.validated_data["phone"])
        except PhoneAuthError as e:
            return _fail_from(e)

        policy = otp_policy()
        data = {
            "expiresInSec": int(policy.code_ttl.total_seconds()),
            "resendInSec": int(policy.issue_cooldown.total_seconds()),
        }
        if getattr(settings, "OTP_DEV_MODE", False):
            data["devCode"] = record.code
        return ok(data)


class PhoneOtpVerifyView(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        serializer = PhoneVerifySerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_fail(serializer)

        try:
            phone = validate_otp(
                serializer.validated_data["phone"],
                serializer.validated_data["code"],
            )
        except PhoneAuthError as e:
            return _fail_from(e)

        # only reachable on the success path of validate_otp
        token = create_session(phone)
        ttl = int(session_ttl().total_seconds())

        response = ok({"phone": phone, "sessionToken": token, "expiresInSec": ttl})
        response.set_cookie(
            settings.CUSTOMER_SESSION_COOKIE,
            token,
            max_age=ttl,
            httponly=True,
            secure=not settings.DEBUG,
            samesite="Lax",
            path="/",
        )
        return response


class PhoneLogoutView(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        raw = get_raw_token(request)
        if raw:
            clear_session(raw)

        response = ok(None)
        response.delete_cookie(settings.CUSTOMER_SESSION_COOKIE, path="/", samesite="Lax")
        return response


class PhoneSessionView(APIView):
    def get(self, request):
        return ok({"phone": request.user.phone})
