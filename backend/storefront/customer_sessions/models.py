# storefront/customer_sessions/models.py
from django.db import models
from django.utils import timezone


class CustomerSession(models.Model):
    jti = models.CharField(max_length=64, primary_key=True)
    phone = models.CharField(max_length=20, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(db_index=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "customer_sessions"

    def is_active(self, now=None) -> bool:
        now = now or timezone.now()
        return self.revoked_at is None and now < self.expires_at

    def __str__(self):
        return f"{self.phone} [{self.jti}]"
