from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from storefront.orders.models import Booking, Order, OrderItem
from storefront.shops.models import Item, Profile


def make_shop(username="rose_studio", **kwargs):
    defaults = dict(
        user_id=f"seller-{username}",
        username=username,
        shop_name="Rose Studio",
        shop_slug=username.replace("_", "-"),
        cancellation_window_hours=24,
    )
    defaults.update(kwargs)
    return Profile.objects.create(**defaults)


def make_item(shop, type="service", **kwargs):
    defaults = dict(
        seller=shop,
        type=type,
        name="Facial" if type == "service" else "Candle",
        price=Decimal("500000.00"),
        duration_minutes=60 if type == "service" else None,
    )
    defaults.update(kwargs)
    return Item.objects.create(**defaults)


def make_booking(shop, service, phone, starts_in=timedelta(days=3), **kwargs):
    start = timezone.now() + starts_in
    defaults = dict(
        seller=shop,
        service=service,
        customer_name="Sara",
        customer_phone=phone,
        start_time=start,
        end_time=start + timedelta(minutes=service.duration_minutes or 30),
        status="confirmed",
    )
    defaults.update(kwargs)
    return Booking.objects.create(**defaults)


def make_order(shop, item, phone, quantity=1, **kwargs):
    subtotal = item.price * quantity
    defaults = dict(
        seller=shop,
        customer_name="Sara",
        customer_phone=phone,
        subtotal=subtotal,
        seller_amount=subtotal,
        total_amount=subtotal,
    )
    defaults.update(kwargs)
    order = Order.objects.create(**defaults)
    OrderItem.objects.create(
        order=order,
        item=item,
        item_name=item.name,
        item_type=item.type,
        unit_price=item.price,
        quantity=quantity,
        subtotal=subtotal,
    )
    return order
