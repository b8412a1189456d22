# storefront/phone_verifications/store.py
"""
Data access for PhoneVerification rows.

No expiry or attempt-cap policy lives here; the issuer and validator in
storefront.phone_auth.services decide what the rows mean. Every write is a
single statement so the database's per-row atomicity is all we rely on.
"""
from datetime import datetime
from typing import Optional

from django.db.models import F

from .models import PhoneVerification


def _outstanding(phone: str):
    return PhoneVerification.objects.filter(
        phone=phone, verified=False, superseded_at__isnull=True
    )


def insert(phone: str, code_hash: str, expires_at: datetime, created_at: datetime) -> PhoneVerification:
    return PhoneVerification.objects.create(
        phone=phone,
        code_hash=code_hash,
        expires_at=expires_at,
        created_at=created_at,
    )


def get(record_id) -> Optional[PhoneVerification]:
    return PhoneVerification.objects.filter(id=record_id).first()


def find_latest_unverified(phone: str) -> Optional[PhoneVerification]:
    return _outstanding(phone).order_by("-created_at").first()


def find_recent(phone: str, since: datetime) -> Optional[PhoneVerification]:
    """Newest row for the phone created at or after `since`, if any."""
    return (
        PhoneVerification.objects.filter(phone=phone, created_at__gte=since)
        .order_by("-created_at")
        .first()
    )


def supersede_outstanding(phone: str, at: datetime) -> int:
    return _outstanding(phone).update(superseded_at=at)


def restore_superseded(phone: str, at: datetime) -> int:
    """Undo supersede_outstanding(phone, at)."""
    return PhoneVerification.objects.filter(
        phone=phone, verified=False, superseded_at=at
    ).update(superseded_at=None)


def increment_attempts(record_id, cap: int) -> bool:
    # capped in the WHERE clause so concurrent mismatches never overshoot
    updated = PhoneVerification.objects.filter(
        id=record_id, verified=False, attempts__lt=cap
    ).update(attempts=F("attempts") + 1)
    return updated == 1


def mark_verified(record_id, cap: int) -> bool:
    updated = PhoneVerification.objects.filter(
        id=record_id, verified=False, superseded_at__isnull=True, attempts__lt=cap
    ).update(verified=True)
    return updated == 1


def delete(record_id) -> None:
    PhoneVerification.objects.filter(id=record_id).delete()


def prune(before: datetime) -> int:
    deleted, _ = PhoneVerification.objects.filter(expires_at__lt=before).delete()
    return deleted
