from datetime import timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from storefront.customer_sessions.services import create_session
from storefront.orders.models import Booking, Order

from .factories import make_booking, make_item, make_order, make_shop

PHONE = "09121234567"
OTHER = "09350001111"

pytestmark = pytest.mark.django_db


@pytest.fixture
def customer(api):
    api.credentials(HTTP_AUTHORIZATION=f"Bearer {create_session(PHONE)}")
    return api


@pytest.fixture
def shop():
    return make_shop()


def test_dashboard_requires_session(api):
    r = api.get("/api/customer/dashboard")
    assert r.status_code == 401


def test_dashboard_lists_only_own_rows(customer, shop):
    service = make_item(shop)
    product = make_item(shop, type="product", stock_quantity=3)
    mine = make_booking(shop, service, PHONE)
    make_booking(shop, service, OTHER)
    order = make_order(shop, product, PHONE, quantity=2)
    make_order(shop, product, OTHER)

    r = customer.get("/api/customer/dashboard")
    assert r.status_code == 200
    data = r.json()["data"]

    assert [b["id"] for b in data["bookings"]] == [str(mine.id)]
    assert data["bookings"][0]["shopSlug"] == "rose-studio"
    assert [o["orderNumber"] for o in data["orders"]] == [order.order_number]
    lines = data["orders"][0]["items"]
    assert lines[0]["quantity"] == 2
    assert lines[0]["itemName"] == "Candle"


def test_cancel_booking_cascades_to_order(customer, shop):
    service = make_item(shop)
    order = make_order(shop, service, PHONE)
    booking = make_booking(shop, service, PHONE, order=order)

    r = customer.post(f"/api/customer/bookings/{booking.id}/cancel", {"reason": "sick"}, format="json")
    assert r.status_code == 200
    assert r.json()["data"] == {"bookingId": str(booking.id), "status": "cancelled"}

    booking.refresh_from_db()
    order.refresh_from_db()
    assert booking.status == "cancelled"
    assert booking.cancellation_reason == "sick"
    assert booking.cancelled_at is not None
    assert order.status == "cancelled"


def test_cancel_inside_window_is_refused(customer, shop):
    service = make_item(shop)
    booking = make_booking(shop, service, PHONE, starts_in=timedelta(hours=5))

    r = customer.post(f"/api/customer/bookings/{booking.id}/cancel")
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CANCELLATION_WINDOW_CLOSED"
    booking.refresh_from_db()
    assert booking.status == "confirmed"


def test_cancel_completed_booking_is_refused(customer, shop):
    booking = make_booking(shop, make_item(shop), PHONE, status="completed")
    r = customer.post(f"/api/customer/bookings/{booking.id}/cancel")
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "BOOKING_NOT_CANCELLABLE"


def test_cannot_cancel_someone_elses_booking(customer, shop):
    booking = make_booking(shop, make_item(shop), OTHER)
    r = customer.post(f"/api/customer/bookings/{booking.id}/cancel")
    assert r.status_code == 404
    assert Booking.objects.get(id=booking.id).status == "confirmed"


def test_default_cancel_reason(customer, shop):
    booking = make_booking(shop, make_item(shop), PHONE)
    customer.post(f"/api/customer/bookings/{booking.id}/cancel")
    booking.refresh_from_db()
    assert booking.cancellation_reason == "لغو توسط مشتری"
    assert not Order.objects.exists()


def test_calendar_link(customer, shop):
    booking = make_booking(shop, make_item(shop), PHONE)

    r = customer.get(f"/api/customer/bookings/{booking.id}/calendar")
    assert r.status_code == 200
    url = urlparse(r.json()["data"]["url"])
    query = parse_qs(url.query)
    assert url.netloc == "calendar.google.com"
    assert query["action"] == ["TEMPLATE"]
    assert query["text"] == ["Facial - Rose Studio"]
    start, end = query["dates"][0].split("/")
    assert start.endswith("Z") and end.endswith("Z")


def test_calendar_link_for_unknown_booking(customer):
    r = customer.get("/api/customer/bookings/00000000-0000-0000-0000-000000000000/calendar")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "BOOKING_NOT_FOUND"
