"""
Paystack webhook primitives

Paystack signs every webhook body with HMAC-SHA512 keyed by the secret
key and sends the hex digest in ``x-paystack-signature``. Amounts are
sent in the currency's minor unit (kobo for NGN).
"""

from __future__ import annotations

import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any

from django.conf import settings  # type: ignore

from shared.domain.errors import InternalError, ValidationError

SIGNATURE_HEADER = "HTTP_X_PAYSTACK_SIGNATURE"
CHARGE_SUCCESS = "charge.success"
CHARGE_FAILED = "charge.failed"


@dataclass(frozen=True)
class PaystackEvent:
    event: str
    reference: str | None
    amount: int | None
    data: dict[str, Any]


def get_secret_key() -> str:
    secret = getattr(settings, "PAYSTACK_SECRET_KEY", "")
    if not secret:
        raise InternalError("Webhook not configured", code="WEBHOOK_NOT_CONFIGURED")
    return secret


def compute_signature(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def verify_signature(body: bytes, signature: str | None, secret: str) -> None:
    """Raise ValidationError unless ``signature`` is the body's HMAC-SHA512."""
    if not signature:
        raise ValidationError("No signature", code="MISSING_SIGNATURE")
    if not hmac.compare_digest(compute_signature(body, secret), signature):
        raise ValidationError("Invalid signature", code="INVALID_SIGNATURE")


def parse_event(body: bytes) -> PaystackEvent:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Invalid JSON payload", code="INVALID_PAYLOAD") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload", code="INVALID_PAYLOAD")
    data = payload.get("data") or {}
    try:
        amount = int(data["amount"]) if data.get("amount") is not None else None
    except (TypeError, ValueError):
        amount = None
    return PaystackEvent(
        event=str(payload.get("event", "")),
        reference=data.get("reference"),
        amount=amount,
        data=data,
    )
