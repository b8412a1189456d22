from django.urls import path
from .views import (
    PhoneLogoutView,
    PhoneOtpRequestView,
    PhoneOtpVerifyView,
    PhoneSessionView,
)

urlpatterns = [
    path("request", PhoneOtpRequestView.as_view()),
    path("verify", PhoneOtpVerifyView.as_view()),
    path("logout", PhoneLogoutView.as_view()),
    path("session", PhoneSessionView.as_view()),
    path("request/", PhoneOtpRequestView.as_view()),
    path("verify/", PhoneOtpVerifyView.as_view()),
    path("logout/", PhoneLogoutView.as_view()),
    path("session/", PhoneSessionView.as_view()),
]
