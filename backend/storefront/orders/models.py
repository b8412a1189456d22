# storefront/orders/models.py
import secrets
import uuid

from django.db import models
from django.utils import timezone

from storefront.shops.models import Item, Profile


def generate_order_number(now=None) -> str:
    # JAT-20260211-7D209625
    now = now or timezone.now()
    return f"JAT-{now:%Y%m%d}-{secrets.token_hex(4).upper()}"


class Order(models.Model):
    STATUS_CHOICES = (
        ("awaiting_approval", "awaiting_approval"),
        ("approved", "approved"),
        ("paid", "paid"),
        ("processing", "processing"),
        ("completed", "completed"),
        ("cancelled", "cancelled"),
        ("refunded", "refunded"),
    )
    PAYMENT_STATUS_CHOICES = (
        ("pending", "pending"),
        ("completed", "completed"),
        ("failed", "failed"),
        ("refunded", "refunded"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=30, unique=True, default=generate_order_number)
    seller = models.ForeignKey(Profile, related_name="orders", on_delete=models.CASCADE)

    customer_name = models.CharField(max_length=100)
    customer_email = models.CharField(max_length=255, blank=True, default="")
    customer_phone = models.CharField(max_length=20, db_index=True)
    shipping_address = models.TextField(blank=True, default="")
    postal_code = models.CharField(max_length=10, blank=True, default="")

    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default="awaiting_approval", db_index=True
    )
    payment_status = models.CharField(
        max_length=10, choices=PAYMENT_STATUS_CHOICES, default="pending"
    )

    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    platform_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    seller_amount = models.DecimalField(max_digits=10, decimal_places=2)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default="IRR")

    customer_note = models.TextField(blank=True, default="")
    cancellation_reason = models.TextField(blank=True, default="")
    paid_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "orders"

    def __str__(self):
        return self.order_number


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, related_name="order_items", on_delete=models.CASCADE)
    item = models.ForeignKey(Item, related_name="order_items", on_delete=models.PROTECT)

    # snapshot at order time
    item_name = models.CharField(max_length=200)
    item_type = models.CharField(max_length=10, choices=Item.TYPE_CHOICES)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)

    appointment_slot = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.IntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "order_items"


class Booking(models.Model):
    STATUS_CHOICES = (
        ("pending", "pending"),
        ("confirmed", "confirmed"),
        ("completed", "completed"),
        ("cancelled", "cancelled"),
        ("no_show", "no_show"),
    )
    CANCELLABLE_STATUSES = ("pending", "confirmed")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey(Profile, related_name="bookings", on_delete=models.CASCADE)
    service = models.ForeignKey(Item, related_name="bookings", on_delete=models.CASCADE)
    order = models.ForeignKey(
        Order,
        related_name="bookings",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )

    customer_name = models.CharField(max_length=100)
    customer_phone = models.CharField(max_length=20, db_index=True)
    customer_email = models.CharField(max_length=255, blank=True, default="")
    customer_note = models.TextField(blank=True, default="")

    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="pending")

    cancellation_reason = models.TextField(blank=True, default="")
    cancelled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "bookings"
        indexes = [
            models.Index(fields=["seller", "start_time"], name="bookings_seller_start_idx"),
        ]

    def __str__(self):
        return f"{self.service_id} @ {self.start_time:%Y-%m-%d %H:%M}"
