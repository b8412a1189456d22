import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(max_length=255, unique=True)),
                ("username", models.CharField(max_length=50, unique=True)),
                ("display_name", models.CharField(blank=True, default="", max_length=100)),
                ("bio", models.TextField(blank=True, default="")),
                ("avatar_url", models.TextField(blank=True, default="")),
                ("shop_name", models.CharField(blank=True, default="", max_length=100)),
                ("shop_slug", models.SlugField(blank=True, null=True, unique=True)),
                ("phone", models.CharField(blank=True, default="", max_length=20)),
                ("is_published", models.BooleanField(default=True)),
                ("vacation_mode", models.BooleanField(default=False)),
                ("vacation_message", models.TextField(blank=True, default="")),
                ("cancellation_window_hours", models.PositiveIntegerField(default=24)),
                ("theme_color", models.CharField(default="#3b82f6", max_length=16)),
                (
                    "background_mode",
                    models.CharField(
                        choices=[("light", "light"), ("dark", "dark")], default="light", max_length=10
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "profiles",
            },
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "type",
                    models.CharField(choices=[("product", "product"), ("service", "service")], max_length=10),
                ),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("currency", models.CharField(default="IRR", max_length=3)),
                ("image_url", models.TextField(blank=True, default="")),
                ("stock_quantity", models.IntegerField(blank=True, null=True)),
                ("duration_minutes", models.IntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "seller",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="items", to="shops.profile"
                    ),
                ),
            ],
            options={
                "db_table": "items",
                "ordering": ["sort_order", "created_at"],
                "indexes": [models.Index(fields=["seller", "is_active"], name="items_seller_active_idx")],
            },
        ),
    ]
