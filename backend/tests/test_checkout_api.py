from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from storefront.customer_sessions.services import create_session
from storefront.orders.models import Booking, Order, OrderItem
from storefront.shops.models import Item

from .factories import make_booking, make_item, make_shop

pytestmark = pytest.mark.django_db


@pytest.fixture
def shop():
    return make_shop()


def checkout(api, items, slug="rose-studio", **overrides):
    body = {
        "customerName": "Sara Ahmadi",
        "customerPhone": "+98 912 123 4567",
        "shippingAddress": "Tehran, Valiasr St, No 12",
        "items": items,
    }
    body.update(overrides)
    return api.post(f"/api/shops/{slug}/orders", body, format="json")


def book(api, service, start, slug="rose-studio", **overrides):
    body = {
        "serviceId": str(service.id),
        "startTime": start.isoformat(),
        "customerName": "Sara Ahmadi",
        "customerPhone": "09121234567",
    }
    body.update(overrides)
    return api.post(f"/api/shops/{slug}/bookings", body, format="json")


def test_checkout_creates_order_and_reserves_stock(api, shop):
    candle = make_item(shop, type="product", price=Decimal("100000.00"), stock_quantity=5)
    soap = make_item(shop, type="product", name="Soap", price=Decimal("50000.00"))

    r = checkout(api, [{"itemId": str(candle.id), "quantity": 2}, {"itemId": str(soap.id), "quantity": 1}])
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["orderNumber"].startswith("JAT-")
    assert data["totalAmount"] == "250000.00"

    order = Order.objects.get(id=data["orderId"])
    assert order.customer_phone == "09121234567"
    assert order.status == "approved"
    assert order.platform_fee == Decimal("25000.00")
    assert order.seller_amount == Decimal("225000.00")
    assert OrderItem.objects.filter(order=order).count() == 2

    candle.refresh_from_db()
    soap.refresh_from_db()
    assert candle.stock_quantity == 3
    assert soap.stock_quantity is None


def test_checkout_out_of_stock_rolls_back(api, shop):
    candle = make_item(shop, type="product", stock_quantity=1)
    soap = make_item(shop, type="product", name="Soap", stock_quantity=4)

    r = checkout(api, [{"itemId": str(soap.id), "quantity": 2}, {"itemId": str(candle.id), "quantity": 2}])
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "OUT_OF_STOCK"

    assert not Order.objects.exists()
    assert Item.objects.get(id=soap.id).stock_quantity == 4


def test_checkout_rejects_foreign_or_inactive_items(api, shop):
    other = make_shop(username="other_shop")
    foreign = make_item(other, type="product")
    retired = make_item(shop, type="product", is_active=False)

    for item in (foreign, retired):
        r = checkout(api, [{"itemId": str(item.id), "quantity": 1}])
        assert r.status_code == 400
        assert r.json()["error"]["code"] == "ITEM_UNAVAILABLE"


def test_checkout_validation(api, shop):
    candle = make_item(shop, type="product")

    r = checkout(api, [])
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"

    line = {"itemId": str(candle.id), "quantity": 1}
    r = checkout(api, [line, line])
    assert r.status_code == 400
    assert "items" in r.json()["error"]["fields"]

    r = checkout(api, [line], shippingAddress="short")
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"

    r = checkout(api, [line], customerPhone="12345")
    assert r.json()["error"]["code"] == "INVALID_PHONE_NUMBER"


def test_checkout_unknown_shop(api):
    r = checkout(api, [{"itemId": "00000000-0000-0000-0000-000000000000", "quantity": 1}], slug="nope")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "SHOP_NOT_FOUND"


def test_booking_creates_pending_booking_with_order(api, shop):
    service = make_item(shop, duration_minutes=45)
    start = (timezone.now() + timedelta(days=3)).replace(microsecond=0)

    r = book(api, service, start, customerPhone="+989121234567")
    assert r.status_code == 201
    data = r.json()["data"]

    booking = Booking.objects.get(id=data["bookingId"])
    assert booking.status == "pending"
    assert booking.customer_phone == "09121234567"
    assert booking.end_time - booking.start_time == timedelta(minutes=45)

    line = OrderItem.objects.get(order_id=booking.order_id)
    assert line.appointment_slot == booking.start_time
    assert line.quantity == 1


def test_booking_overlap_is_refused(api, shop):
    service = make_item(shop)
    existing = make_booking(shop, service, "09350001111", starts_in=timedelta(days=3))

    r = book(api, service, existing.start_time + timedelta(minutes=30))
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "SLOT_TAKEN"

    # a cancelled booking frees its slot
    Booking.objects.filter(id=existing.id).update(status="cancelled")
    assert book(api, service, existing.start_time + timedelta(minutes=30)).status_code == 201


def test_booking_inside_lead_time(api, shop):
    service = make_item(shop)
    r = book(api, service, timezone.now() + timedelta(hours=2))
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BOOKING_TOO_SOON"


def test_booking_on_vacation(api):
    shop = make_shop(vacation_mode=True)
    r = book(api, make_item(shop), timezone.now() + timedelta(days=3))
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "SHOP_CLOSED"


def test_booking_requires_a_service(api, shop):
    product = make_item(shop, type="product")
    r = book(api, product, timezone.now() + timedelta(days=3))
    assert r.json()["error"]["code"] == "ITEM_UNAVAILABLE"


def test_checkout_order_shows_up_for_verified_customer(api, shop):
    candle = make_item(shop, type="product", stock_quantity=2)
    number = checkout(api, [{"itemId": str(candle.id), "quantity": 1}]).json()["data"]["orderNumber"]

    api.credentials(HTTP_AUTHORIZATION=f"Bearer {create_session('09121234567')}")
    r = api.get(f"/api/customer/orders/{number}")
    assert r.status_code == 200
    assert r.json()["data"]["items"][0]["itemName"] == "Candle"

    dashboard = api.get("/api/customer/dashboard").json()["data"]
    assert [o["orderNumber"] for o in dashboard["orders"]] == [number]


def test_order_lookup_is_scoped_to_session_phone(api, shop):
    candle = make_item(shop, type="product")
    number = checkout(api, [{"itemId": str(candle.id), "quantity": 1}]).json()["data"]["orderNumber"]

    api.credentials(HTTP_AUTHORIZATION=f"Bearer {create_session('09350001111')}")
    r = api.get(f"/api/customer/orders/{number}")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "ORDER_NOT_FOUND"
