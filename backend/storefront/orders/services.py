# storefront/orders/services.py
"""
Checkout and booking creation for public shop pages.

The buyer's phone is normalized before it is stored, so orders and bookings
line up with the phone a customer later verifies by OTP.
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from storefront.phone_auth.phone import mask_phone, require_mobile
from storefront.shops.models import Item, Profile
from storefront.shops.services import find_published_shop

from .models import Booking, Order, OrderItem

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
DEFAULT_SERVICE_MINUTES = 30


class CheckoutError(Exception):
    code = "CHECKOUT_FAILED"
    http_status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ShopNotFound(CheckoutError):
    code = "SHOP_NOT_FOUND"
    http_status = 404


class ShopClosed(CheckoutError):
    code = "SHOP_CLOSED"
    http_status = 409


class ItemUnavailable(CheckoutError):
    code = "ITEM_UNAVAILABLE"


class OutOfStock(CheckoutError):
    code = "OUT_OF_STOCK"
    http_status = 409


class BookingTooSoon(CheckoutError):
    code = "BOOKING_TOO_SOON"


class SlotTaken(CheckoutError):
    code = "SLOT_TAKEN"
    http_status = 409


def _shop(slug: str) -> Profile:
    shop = find_published_shop(slug)
    if not shop:
        raise ShopNotFound("فروشگاه یافت نشد")
    return shop


def _split_fee(shop: Profile, subtotal: Decimal):
    fee = (subtotal * shop.platform_fee_percentage / 100).quantize(CENT)
    return fee, subtotal - fee


def create_order(
    slug: str,
    *,
    customer_name: str,
    customer_phone: str,
    shipping_address: str,
    lines: list,
    customer_email: str = "",
    postal_code: str = "",
    customer_note: str = "",
) -> Order:
    """
    Place a cart order. `lines` is a list of {"item_id", "quantity"}.

    Tracked product stock is reserved in the same transaction; an
    untracked product (stock_quantity is null) and services never run out.
    """
    phone = require_mobile(customer_phone)
    shop = _shop(slug)

    ids = [line["item_id"] for line in lines]
    items = {
        it.id: it
        for it in Item.objects.filter(id__in=ids, seller=shop, is_active=True)
    }
    missing = [i for i in ids if i not in items]
    if missing:
        raise ItemUnavailable("برخی از محصولات یافت نشدند. لطفاً صفحه را رفرش کنید.")

    subtotal = sum(
        (items[line["item_id"]].price * line["quantity"] for line in lines), Decimal("0")
    )
    fee, seller_amount = _split_fee(shop, subtotal)

    with transaction.atomic():
        order = Order.objects.create(
            seller=shop,
            customer_name=customer_name,
            customer_phone=phone,
            customer_email=customer_email,
            shipping_address=shipping_address,
            postal_code=postal_code,
            customer_note=customer_note,
            status="approved",
            payment_status="pending",
            subtotal=subtotal,
            platform_fee=fee,
            seller_amount=seller_amount,
            total_amount=subtotal,
            currency=items[ids[0]].currency,
        )

        for line in lines:
            item = items[line["item_id"]]
            qty = line["quantity"]
            if item.type == "product" and item.stock_quantity is not None:
                reserved = Item.objects.filter(id=item.id, stock_quantity__gte=qty).update(
                    stock_quantity=F("stock_quantity") - qty
                )
                if not reserved:
                    raise OutOfStock(f"موجودی «{item.name}» کافی نیست")

            OrderItem.objects.create(
                order=order,
                item=item,
                item_name=item.name,
                item_type=item.type,
                unit_price=item.price,
                quantity=qty,
                subtotal=item.price * qty,
                duration_minutes=item.duration_minutes if item.type == "service" else None,
            )

    logger.info("order %s placed at %s by %s", order.order_number, shop.public_slug, mask_phone(phone))
    return order


def create_booking(
    slug: str,
    *,
    service_id,
    start_time: datetime,
    customer_name: str,
    customer_phone: str,
    customer_email: str = "",
    customer_note: str = "",
    now: Optional[datetime] = None,
) -> Booking:
    """
    Book one appointment and create its single-line order.

    Refused while the shop is on vacation, inside the seller's lead time,
    or when it overlaps another non-cancelled booking of the same seller.
    """
    phone = require_mobile(customer_phone)
    now = now or timezone.now()
    shop = _shop(slug)
    if shop.vacation_mode:
        raise ShopClosed("فروشگاه موقتاً بسته است")

    service = Item.objects.filter(
        id=service_id, seller=shop, type="service", is_active=True
    ).first()
    if not service:
        raise ItemUnavailable("خدمت یافت نشد")

    if start_time <= now + timedelta(hours=shop.lead_time_hours):
        raise BookingTooSoon(f"رزرو باید حداقل {shop.lead_time_hours} ساعت قبل انجام شود")

    duration = service.duration_minutes or DEFAULT_SERVICE_MINUTES
    end_time = start_time + timedelta(minutes=duration)
    fee, seller_amount = _split_fee(shop, service.price)

    with transaction.atomic():
        # lock the seller's overlapping bookings so two buyers cannot take one slot
        clash = list(
            Booking.objects.select_for_update()
            .filter(seller=shop, start_time__lt=end_time, end_time__gt=start_time)
            .exclude(status="cancelled")
            .values_list("id", flat=True)
        )
        if clash:
            raise SlotTaken("این زمان قبلاً رزرو شده است. لطفاً زمان دیگری انتخاب کنید.")

        order = Order.objects.create(
            seller=shop,
            customer_name=customer_name,
            customer_phone=phone,
            customer_email=customer_email,
            customer_note=customer_note,
            status="approved",
            payment_status="pending",
            subtotal=service.price,
            platform_fee=fee,
            seller_amount=seller_amount,
            total_amount=service.price,
            currency=service.currency,
        )
        OrderItem.objects.create(
            order=order,
            item=service,
            item_name=service.name,
            item_type="service",
            unit_price=service.price,
            quantity=1,
            subtotal=service.price,
            appointment_slot=start_time,
            duration_minutes=duration,
        )
        booking = Booking.objects.create(
            seller=shop,
            service=service,
            order=order,
            customer_name=customer_name,
            customer_phone=phone,
            customer_email=customer_email,
            customer_note=customer_note,
            start_time=start_time,
            end_time=end_time,
            status="pending",
        )

    logger.info("booking %s at %s for %s", booking.id, shop.public_slug, mask_phone(phone))
    return booking
