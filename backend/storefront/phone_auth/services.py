# storefront/phone_auth/services.py
import hashlib
import hmac
import logging
import math
import secrets
from datetime import datetime
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from storefront.phone_verifications import store
from storefront.phone_verifications.models import PhoneVerification

from .conf import otp_policy
from .errors import (
    AttemptsExceeded,
    DispatchFailed,
    Expired,
    InvalidCode,
    NotFound,
    RateLimited,
)
from .phone import mask_phone, require_mobile
from .sms import SmsDispatchError, SmsDispatcher, get_dispatcher

logger = logging.getLogger(__name__)


def generate_code(length: int) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


def hash_code(code: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), code.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_otp(
    phone: str,
    *,
    dispatcher: Optional[SmsDispatcher] = None,
    now: Optional[datetime] = None,
) -> PhoneVerification:
    """
    Create a verification record for `phone` and send its code by SMS.

    Raises InvalidPhone, RateLimited or DispatchFailed. The returned
    instance carries the raw code in `.code`; the row only holds its HMAC.
    """
    phone = require_mobile(phone)
    policy = otp_policy()
    now = now or timezone.now()

    if dispatcher is None:
        try:
            dispatcher = get_dispatcher()
        except SmsDispatchError as e:
            logger.error("no SMS backend for %s: %s", mask_phone(phone), e)
            raise DispatchFailed() from e

    code = generate_code(policy.code_length)
    try:
        with transaction.atomic():
            recent = store.find_recent(phone, now - policy.issue_cooldown)
            if recent is not None:
                wait = (recent.created_at + policy.issue_cooldown - now).total_seconds()
                raise RateLimited(retry_after=math.ceil(wait))

            store.supersede_outstanding(phone, now)
            record = store.insert(
                phone=phone,
                code_hash=hash_code(code, policy.secret),
                expires_at=now + policy.code_ttl,
                created_at=now,
            )
    except IntegrityError as e:
        # another request for this phone inserted first
        logger.info("OTP issue race lost for %s", mask_phone(phone))
        raise RateLimited(retry_after=policy.issue_cooldown.total_seconds()) from e

    try:
        dispatcher.send(phone, code)
    except Exception as e:
        logger.error("OTP dispatch failed for %s: %s", mask_phone(phone), e)
        # the previous code stays usable when the new one never went out
        with transaction.atomic():
            store.delete(record.id)
            store.restore_superseded(phone, now)
        raise DispatchFailed() from e

    logger.info("OTP issued for %s (record=%s)", mask_phone(phone), record.id)
    record.code = code
    return record


def validate_otp(phone: str, submitted_code: str, *, now: Optional[datetime] = None) -> str:
    """
    Check `submitted_code` against the newest outstanding record for `phone`.

    Returns the normalized phone on success. A record can succeed once;
    every mismatch is counted before InvalidCode is raised.
    """
    phone = require_mobile(phone)
    policy = otp_policy()
    now = now or timezone.now()

    record = store.find_latest_unverified(phone)
    if record is None:
        raise NotFound()

    if record.is_expired(now):
        raise Expired()

    if record.attempts >= policy.max_attempts:
        raise AttemptsExceeded()

    submitted_hash = hash_code(str(submitted_code or "").strip(), policy.secret)
    if not hmac.compare_digest(submitted_hash, record.code_hash):
        if not store.increment_attempts(record.id, policy.max_attempts):
            current = store.get(record.id)
            if current is None or current.verified or current.superseded_at is not None:
                # consumed or replaced by a concurrent request
                raise NotFound()
            raise AttemptsExceeded()
        logger.info(
            "OTP mismatch for %s (attempt %s/%s)",
            mask_phone(phone),
            record.attempts + 1,
            policy.max_attempts,
        )
        raise InvalidCode()

    if not store.mark_verified(record.id, policy.max_attempts):
        # consumed, superseded or locked out between read and write
        raise NotFound()

    logger.info("OTP verified for %s", mask_phone(phone))
    return phone


def prune_verifications(before: datetime) -> int:
    return store.prune(before)
