# storefront/shops/models.py
import uuid
from decimal import Decimal

from django.db import models


class Profile(models.Model):
    BACKGROUND_CHOICES = (
        ("light", "light"),
        ("dark", "dark"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=255, unique=True)  # external auth provider id
    username = models.CharField(max_length=50, unique=True)
    display_name = models.CharField(max_length=100, blank=True, default="")
    bio = models.TextField(blank=True, default="")
    avatar_url = models.TextField(blank=True, default="")

    shop_name = models.CharField(max_length=100, blank=True, default="")
    shop_slug = models.SlugField(max_length=50, unique=True, null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True, default="")

    is_published = models.BooleanField(default=True)
    vacation_mode = models.BooleanField(default=False)
    vacation_message = models.TextField(blank=True, default="")
    cancellation_window_hours = models.PositiveIntegerField(default=24)
    lead_time_hours = models.PositiveIntegerField(default=24)  # minimum notice for a booking
    platform_fee_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("10.00"))

    theme_color = models.CharField(max_length=16, default="#3b82f6")
    background_mode = models.CharField(
        max_length=10, choices=BACKGROUND_CHOICES, default="light"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profiles"

    @property
    def public_name(self) -> str:
        return self.shop_name or self.username

    @property
    def public_slug(self) -> str:
        return self.shop_slug or self.username

    def __str__(self):
        return self.public_name


class Item(models.Model):
    TYPE_CHOICES = (
        ("product", "product"),
        ("service", "service"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey(Profile, related_name="items", on_delete=models.CASCADE)

    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default="IRR")
    image_url = models.TextField(blank=True, default="")

    stock_quantity = models.IntegerField(null=True, blank=True)  # products only
    duration_minutes = models.IntegerField(null=True, blank=True)  # services only

    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "items"
        ordering = ["sort_order", "created_at"]
        indexes = [
            models.Index(fields=["seller", "is_active"], name="items_seller_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.type})"
