# storefront/shops/serializers.py
from rest_framework import serializers
from .models import Item, Profile


class ShopItemSerializer(serializers.ModelSerializer):
    itemId = serializers.UUIDField(source="id", read_only=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True)
    stockQuantity = serializers.IntegerField(source="stock_quantity", read_only=True)
    durationMinutes = serializers.IntegerField(source="duration_minutes", read_only=True)
    inStock = serializers.SerializerMethodField()

    class Meta:
        model = Item
        fields = [
            "itemId",
            "type",
            "name",
            "description",
            "price",
            "currency",
            "imageUrl",
            "stockQuantity",
            "durationMinutes",
            "inStock",
        ]

    def get_inStock(self, obj: Item):
        # services and untracked products are always available
        if obj.type != "product" or obj.stock_quantity is None:
            return True
        return obj.stock_quantity > 0


class ShopSerializer(serializers.ModelSerializer):
    shopName = serializers.CharField(source="public_name", read_only=True)
    shopSlug = serializers.CharField(source="public_slug", read_only=True)
    displayName = serializers.CharField(source="display_name", read_only=True)
    avatarUrl = serializers.CharField(source="avatar_url", read_only=True)
    vacationMode = serializers.BooleanField(source="vacation_mode", read_only=True)
    vacationMessage = serializers.CharField(source="vacation_message", read_only=True)
    cancellationWindowHours = serializers.IntegerField(
        source="cancellation_window_hours", read_only=True
    )
    leadTimeHours = serializers.IntegerField(source="lead_time_hours", read_only=True)
    themeColor = serializers.CharField(source="theme_color", read_only=True)
    backgroundMode = serializers.CharField(source="background_mode", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "shopName",
            "shopSlug",
            "username",
            "displayName",
            "bio",
            "avatarUrl",
            "vacationMode",
            "vacationMessage",
            "cancellationWindowHours",
            "leadTimeHours",
            "themeColor",
            "backgroundMode",
        ]
