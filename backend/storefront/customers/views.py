# storefront/customers/views.py
from rest_framework.views import APIView

from storefront.common.responses import ok, fail
from .services import (
    CustomerActionError,
    calendar_url,
    cancel_booking,
    get_bookings_and_orders,
    get_order,
)


class CustomerDashboardView(APIView):
    # GET /api/customer/dashboard
    def get(self, request):
        return ok(get_bookings_and_orders(request.user.phone))


class CustomerOrderView(APIView):
    # GET /api/customer/orders/<order_number>
    def get(self, request, order_number):
        try:
            data = get_order(request.user.phone, order_number)
        except CustomerActionError as e:
            return fail(e.code, e.message, e.http_status)
        return ok(data)


class BookingCancelView(APIView):
    # POST /api/customer/bookings/<id>/cancel
    # body: { "reason": "..." } (optional)
    def post(self, request, booking_id):
        reason = request.data.get("reason") or ""
        try:
            booking = cancel_booking(request.user.phone, booking_id, reason=str(reason))
        except CustomerActionError as e:
            return fail(e.code, e.message, e.http_status)
        return ok({"bookingId": str(booking.id), "status": booking.status})


class BookingCalendarView(APIView):
    # GET /api/customer/bookings/<id>/calendar
    def get(self, request, booking_id):
        try:
            url = calendar_url(request.user.phone, booking_id)
        except CustomerActionError as e:
            return fail(e.code, e.message, e.http_status)
        return ok({"url": url})
