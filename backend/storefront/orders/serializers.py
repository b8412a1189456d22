from rest_framework import serializers


class OrderLineSerializer(serializers.Serializer):
    itemId = serializers.UUIDField(source="item_id")
    quantity = serializers.IntegerField(min_value=1, max_value=100)


class _CustomerFields(serializers.Serializer):
    customerName = serializers.CharField(source="customer_name", min_length=2, max_length=100)
    customerPhone = serializers.CharField(source="customer_phone", max_length=32)
    customerEmail = serializers.EmailField(
        source="customer_email", allow_blank=True, default=""
    )
    customerNote = serializers.CharField(
        source="customer_note", allow_blank=True, default="", max_length=1000
    )


class CheckoutSerializer(_CustomerFields):
    shippingAddress = serializers.CharField(source="shipping_address", min_length=10)
    postalCode = serializers.CharField(
        source="postal_code", allow_blank=True, default="", max_length=10
    )
    items = OrderLineSerializer(many=True, source="lines", allow_empty=False)

    def validate_items(self, value):
        ids = [line["item_id"] for line in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("duplicate item in cart")
        return value


class BookingCreateSerializer(_CustomerFields):
    serviceId = serializers.UUIDField(source="service_id")
    startTime = serializers.DateTimeField(source="start_time")
