from datetime import timedelta

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from storefront.phone_verifications import store
from storefront.phone_verifications.models import PhoneVerification

PHONE = "09121234567"

pytestmark = pytest.mark.django_db


def _insert(created_at, phone=PHONE):
    return store.insert(
        phone=phone,
        code_hash="x" * 64,
        expires_at=created_at + timedelta(minutes=5),
        created_at=created_at,
    )


def test_find_latest_unverified_returns_newest_outstanding():
    now = timezone.now()
    old = _insert(now - timedelta(minutes=2))
    store.supersede_outstanding(PHONE, now - timedelta(minutes=1))
    new = _insert(now - timedelta(minutes=1))

    latest = store.find_latest_unverified(PHONE)
    assert latest.id == new.id
    assert PhoneVerification.objects.get(id=old.id).superseded_at is not None


def test_find_latest_unverified_skips_verified():
    rec = _insert(timezone.now())
    assert store.mark_verified(rec.id, cap=5)
    assert store.find_latest_unverified(PHONE) is None


def test_one_outstanding_record_per_phone():
    now = timezone.now()
    _insert(now)
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            _insert(now + timedelta(seconds=1))

    # other phones are unaffected
    _insert(now, phone="09350000000")


def test_increment_attempts_stops_at_cap():
    rec = _insert(timezone.now())
    for _ in range(3):
        assert store.increment_attempts(rec.id, cap=3)
    assert not store.increment_attempts(rec.id, cap=3)

    rec.refresh_from_db()
    assert rec.attempts == 3


def test_mark_verified_only_once():
    rec = _insert(timezone.now())
    assert store.mark_verified(rec.id, cap=5)
    assert not store.mark_verified(rec.id, cap=5)


def test_mark_verified_refuses_locked_record():
    rec = _insert(timezone.now())
    PhoneVerification.objects.filter(id=rec.id).update(attempts=5)
    assert not store.mark_verified(rec.id, cap=5)


def test_find_recent_respects_window():
    now = timezone.now()
    _insert(now - timedelta(seconds=90))
    assert store.find_recent(PHONE, now - timedelta(seconds=60)) is None
    assert store.find_recent(PHONE, now - timedelta(seconds=120)) is not None


def test_prune_deletes_only_old_rows():
    now = timezone.now()
    stale = _insert(now - timedelta(days=2))
    store.supersede_outstanding(PHONE, now)
    fresh = _insert(now)

    assert store.prune(now - timedelta(hours=24)) == 1
    assert not PhoneVerification.objects.filter(id=stale.id).exists()
    assert PhoneVerification.objects.filter(id=fresh.id).exists()


def test_restore_superseded_reopens_previous_row():
    now = timezone.now()
    rec = _insert(now)
    store.supersede_outstanding(PHONE, now)
    assert store.find_latest_unverified(PHONE) is None

    assert store.restore_superseded(PHONE, now) == 1
    assert store.find_latest_unverified(PHONE).id == rec.id
