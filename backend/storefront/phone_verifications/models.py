# storefront/phone_verifications/models.py
import uuid

from django.db import models
from django.db.models import Q
from django.utils import timezone


class PhoneVerification(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone = models.CharField(max_length=20)
    code_hash = models.CharField(max_length=64)  # raw code is never stored
    expires_at = models.DateTimeField()
    attempts = models.PositiveSmallIntegerField(default=0)
    verified = models.BooleanField(default=False)
    superseded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "phone_verifications"
        indexes = [
            models.Index(fields=["phone"], name="phone_verif_phone_idx"),
            models.Index(fields=["expires_at"], name="phone_verif_expires_idx"),
        ]
        constraints = [
            # one outstanding code per phone
            models.UniqueConstraint(
                fields=["phone"],
                condition=Q(verified=False, superseded_at__isnull=True),
                name="phone_verif_one_outstanding",
            ),
        ]

    # set by the issuer on the instance it returns; never persisted
    code = None

    def is_expired(self, now=None) -> bool:
        return (now or timezone.now()) > self.expires_at

    def __str__(self):
        return f"{self.phone} ({'verified' if self.verified else 'pending'})"
