# storefront/phone_auth/serializers.py
from rest_framework import serializers

from .conf import otp_policy


class PhoneRequestSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=32, trim_whitespace=True)


class PhoneVerifySerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=32, trim_whitespace=True)
    code = serializers.CharField(max_length=16, trim_whitespace=True)

    def validate_code(self, value):
        length = otp_policy().code_length
        if len(value) != length or not value.isdigit():
            raise serializers.ValidationError(f"code must be {length} digits")
        return value
