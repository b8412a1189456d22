# storefront/customers/services.py
"""
Customer-facing reads and writes over orders and bookings.

Every function takes the session phone explicitly; rows are matched on
customer_phone, the only link between a verified phone and commerce data.
"""
import logging
from datetime import timedelta, timezone as dt_timezone
from urllib.parse import urlencode

from django.db import transaction
from django.utils import timezone

from storefront.orders.models import Booking, Order, OrderItem

logger = logging.getLogger(__name__)

DEFAULT_CANCEL_REASON = "لغو توسط مشتری"
GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/event"


class CustomerActionError(Exception):
    code = "CUSTOMER_ACTION_FAILED"
    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookingNotFound(CustomerActionError):
    code = "BOOKING_NOT_FOUND"
    http_status = 404


class OrderNotFound(CustomerActionError):
    code = "ORDER_NOT_FOUND"
    http_status = 404


class BookingNotCancellable(CustomerActionError):
    code = "BOOKING_NOT_CANCELLABLE"
    http_status = 409


class CancellationWindowClosed(CustomerActionError):
    code = "CANCELLATION_WINDOW_CLOSED"
    http_status = 409


def _booking_row(b: Booking) -> dict:
    seller = b.seller
    return {
        "id": str(b.id),
        "serviceId": str(b.service_id),
        "serviceName": b.service.name,
        "sellerName": seller.public_name,
        "shopSlug": seller.public_slug,
        "customerName": b.customer_name,
        "customerPhone": b.customer_phone,
        "customerEmail": b.customer_email or None,
        "startTime": b.start_time.isoformat(),
        "endTime": b.end_time.isoformat(),
        "status": b.status,
        "orderId": str(b.order_id) if b.order_id else None,
        "cancellationWindowHours": seller.cancellation_window_hours,
        "createdAt": b.created_at.isoformat(),
    }


def _order_row(o: Order, items) -> dict:
    return {
        "id": str(o.id),
        "orderNumber": o.order_number,
        "sellerName": o.seller.public_name,
        "shopSlug": o.seller.public_slug,
        "customerName": o.customer_name,
        "status": o.status,
        "totalAmount": str(o.total_amount),
        "createdAt": o.created_at.isoformat(),
        "items": [
            {
                "id": str(it.id),
                "itemName": it.item_name,
                "itemType": it.item_type,
                "unitPrice": str(it.unit_price),
                "quantity": it.quantity,
                "subtotal": str(it.subtotal),
            }
            for it in items
        ],
    }


def get_bookings_and_orders(phone: str) -> dict:
    bookings = (
        Booking.objects.filter(customer_phone=phone)
        .select_related("service", "seller")
        .order_by("-start_time")
    )
    orders = list(
        Order.objects.filter(customer_phone=phone)
        .select_related("seller")
        .order_by("-created_at")
    )

    # one query for all order lines
    items_by_order = {}
    if orders:
        for it in OrderItem.objects.filter(order_id__in=[o.id for o in orders]).order_by("created_at"):
            items_by_order.setdefault(it.order_id, []).append(it)

    return {
        "bookings": [_booking_row(b) for b in bookings],
        "orders": [_order_row(o, items_by_order.get(o.id, [])) for o in orders],
    }


def get_order(phone: str, order_number: str) -> dict:
    order = (
        Order.objects.filter(order_number=order_number.strip().upper(), customer_phone=phone)
        .select_related("seller")
        .first()
    )
    if not order:
        raise OrderNotFound("سفارش یافت نشد")
    return _order_row(order, order.order_items.order_by("created_at"))


def _own_booking(phone: str, booking_id, lock: bool = False) -> Booking:
    qs = Booking.objects.filter(id=booking_id, customer_phone=phone).select_related(
        "seller", "service"
    )
    if lock:
        qs = qs.select_for_update()
    booking = qs.first()
    if not booking:
        raise BookingNotFound("رزرو یافت نشد")
    return booking


def cancel_booking(phone: str, booking_id, reason: str = "", now=None) -> Booking:
    """
    Cancel the customer's own booking if it is still pending/confirmed and
    the appointment is further away than the seller's cancellation window.
    A linked order is cancelled in the same transaction.
    """
    now = now or timezone.now()

    with transaction.atomic():
        booking = _own_booking(phone, booking_id, lock=True)
        if booking.status not in Booking.CANCELLABLE_STATUSES:
            raise BookingNotCancellable("امکان لغو این رزرو وجود ندارد")

        window_hours = booking.seller.cancellation_window_hours
        if booking.start_time - now < timedelta(hours=window_hours):
            raise CancellationWindowClosed(
                f"لغو فقط تا {window_hours} ساعت قبل از نوبت امکان‌پذیر است"
            )

        reason = (reason or "").strip() or DEFAULT_CANCEL_REASON
        booking.status = "cancelled"
        booking.cancelled_at = now
        booking.cancellation_reason = reason
        booking.save(update_fields=["status", "cancelled_at", "cancellation_reason", "updated_at"])

        if booking.order_id:
            Order.objects.filter(id=booking.order_id).update(
                status="cancelled",
                cancelled_at=now,
                cancellation_reason=reason,
                updated_at=now,
            )

    logger.info("booking %s cancelled by customer", booking.id)
    return booking


def _gcal_stamp(dt) -> str:
    return dt.astimezone(dt_timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def calendar_url(phone: str, booking_id) -> str:
    booking = _own_booking(phone, booking_id)
    shop = booking.seller.public_name
    service = booking.service.name
    query = urlencode(
        {
            "action": "TEMPLATE",
            "text": f"{service} - {shop}",
            "dates": f"{_gcal_stamp(booking.start_time)}/{_gcal_stamp(booking.end_time)}",
            "details": f"نوبت {service} در {shop}",
        }
    )
    return f"{GOOGLE_CALENDAR_URL}?{query}"
