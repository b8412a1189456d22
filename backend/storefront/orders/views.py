# storefront/orders/views.py
from rest_framework.views import APIView

from storefront.common.responses import ok, fail
from storefront.phone_auth.errors import InvalidPhone

from .serializers import BookingCreateSerializer, CheckoutSerializer
from .services import CheckoutError, create_booking, create_order


def _validation_fail(serializer):
    return fail("VALIDATION_ERROR", "invalid request", fields=serializer.errors)


class ShopCheckoutView(APIView):
    # POST /api/shops/<slug>/orders
    authentication_classes = []
    permission_classes = []

    def post(self, request, slug: str):
        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_fail(serializer)

        try:
            order = create_order(slug, **serializer.validated_data)
        except InvalidPhone as e:
            return fail(e.code, "شماره تماس معتبر نیست", e.http_status)
        except CheckoutError as e:
            return fail(e.code, e.message, e.http_status)

        return ok(
            {
                "orderId": str(order.id),
                "orderNumber": order.order_number,
                "totalAmount": str(order.total_amount),
                "status": order.status,
            },
            http_status=201,
        )


class ShopBookingCreateView(APIView):
    # POST /api/shops/<slug>/bookings
    authentication_classes = []
    permission_classes = []

    def post(self, request, slug: str):
        serializer = BookingCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_fail(serializer)

        try:
            booking = create_booking(slug, **serializer.validated_data)
        except InvalidPhone as e:
            return fail(e.code, "شماره تماس معتبر نیست", e.http_status)
        except CheckoutError as e:
            return fail(e.code, e.message, e.http_status)

        return ok(
            {
                "bookingId": str(booking.id),
                "orderId": str(booking.order_id),
                "orderNumber": booking.order.order_number,
                "startTime": booking.start_time.isoformat(),
                "endTime": booking.end_time.isoformat(),
                "status": booking.status,
            },
            http_status=201,
        )
