# storefront/common/management/commands/seed_demo.py
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from storefront.orders.models import Booking, Order, OrderItem
from storefront.shops.models import Item, Profile

DEMO_CUSTOMER_PHONE = "09121234567"


class Command(BaseCommand):
    help = "Seed a demo shop with items, an order and a booking for the demo customer"

    def add_arguments(self, parser):
        parser.add_argument("--phone", default=DEMO_CUSTOMER_PHONE)

    @transaction.atomic
    def handle(self, *args, **options):
        phone = options["phone"]
        now = timezone.now()

        # 1) Shop
        shop, created = Profile.objects.get_or_create(
            user_id="demo-seller",
            defaults=dict(
                username="demo_shop",
                display_name="فروشگاه نمونه",
                shop_name="فروشگاه نمونه",
                shop_slug="demo-shop",
                phone="09120000000",
                cancellation_window_hours=24,
            ),
        )
        self.stdout.write(self.style.SUCCESS(f"profiles done (created={int(created)})"))

        # 2) Items
        product, _ = Item.objects.get_or_create(
            seller=shop,
            name="شمع دست‌ساز",
            defaults=dict(type="product", price=Decimal("450000.00"), stock_quantity=12),
        )
        service, _ = Item.objects.get_or_create(
            seller=shop,
            name="مشاوره پوست",
            defaults=dict(type="service", price=Decimal("900000.00"), duration_minutes=45),
        )
        self.stdout.write(self.style.SUCCESS("items done"))

        # 3) Order with one product line
        order = Order.objects.filter(seller=shop, customer_phone=phone).first()
        if order is None:
            qty = 2
            subtotal = product.price * qty
            fee = (subtotal * Decimal("0.10")).quantize(Decimal("0.01"))
            order = Order.objects.create(
                seller=shop,
                customer_name="مشتری نمونه",
                customer_phone=phone,
                status="paid",
                payment_status="completed",
                subtotal=subtotal,
                platform_fee=fee,
                seller_amount=subtotal - fee,
                total_amount=subtotal,
                paid_at=now,
            )
            OrderItem.objects.create(
                order=order,
                item=product,
                item_name=product.name,
                item_type=product.type,
                unit_price=product.price,
                quantity=qty,
                subtotal=subtotal,
            )
        self.stdout.write(self.style.SUCCESS(f"orders done ({order.order_number})"))

        # 4) Booking three days ahead
        start = (now + timedelta(days=3)).replace(minute=0, second=0, microsecond=0)
        _, b_created = Booking.objects.get_or_create(
            seller=shop,
            service=service,
            customer_phone=phone,
            defaults=dict(
                customer_name="مشتری نمونه",
                start_time=start,
                end_time=start + timedelta(minutes=service.duration_minutes or 30),
                status="confirmed",
            ),
        )
        self.stdout.write(self.style.SUCCESS(f"bookings done (created={int(b_created)})"))

        self.stdout.write(self.style.SUCCESS(f"seed_demo finished: shop /api/shops/{shop.public_slug}"))
