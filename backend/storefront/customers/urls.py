from django.urls import path
from .views import (
    BookingCalendarView,
    BookingCancelView,
    CustomerDashboardView,
    CustomerOrderView,
)

urlpatterns = [
    path("dashboard", CustomerDashboardView.as_view()),
    path("dashboard/", CustomerDashboardView.as_view()),
    path("orders/<str:order_number>", CustomerOrderView.as_view()),
    path("orders/<str:order_number>/", CustomerOrderView.as_view()),
    path("bookings/<uuid:booking_id>/cancel", BookingCancelView.as_view()),
    path("bookings/<uuid:booking_id>/cancel/", BookingCancelView.as_view()),
    path("bookings/<uuid:booking_id>/calendar", BookingCalendarView.as_view()),
    path("bookings/<uuid:booking_id>/calendar/", BookingCalendarView.as_view()),
]
