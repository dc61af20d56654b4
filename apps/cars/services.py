"""Listing workflows: create, edit, moderate and remove cars."""

from __future__ import annotations

from typing import Any

import structlog
from django.db import IntegrityError, transaction  # type: ignore

from apps.users.identity import Actor
from shared.domain.errors import DuplicateKey, Forbidden, ValidationError

from .models import Car

logger = structlog.get_logger(__name__)


def _duplicate_key_error(exc: IntegrityError) -> DuplicateKey:
    message = str(exc).lower()
    if "plate_number" in message:
        return DuplicateKey("Plate number already exists", code="DUPLICATE_PLATE_NUMBER")
    if "vin" in message:
        return DuplicateKey("VIN already exists", code="DUPLICATE_VIN")
    return DuplicateKey()


def _save(car: Car) -> Car:
    try:
        with transaction.atomic():
            car.save()
    except IntegrityError as exc:
        raise _duplicate_key_error(exc) from exc
    return car


def create_car(owner, data: dict[str, Any]) -> Car:
    """New listings always start unverified and wait for an administrator."""
    car = Car(owner=owner, is_verified=False, **data)
    _save(car)
    logger.info("car.created", car_id=car.pk, owner_id=owner.pk)
    return car


def update_car(actor: Actor, car: Car, changes: dict[str, Any]) -> Car:
    """Apply owner/admin edits. Non-admin edits send the car back to moderation."""
    if not actor.is_admin and car.owner_id != actor.id:
        raise Forbidden("You can only edit your own cars")
    for field, value in changes.items():
        setattr(car, field, value)
    if changes and not actor.is_admin:
        car.is_verified = False
    _save(car)
    logger.info("car.updated", car_id=car.pk, actor_id=actor.id, fields=sorted(changes))
    return car


def set_verified(actor: Actor, car: Car, verified: bool = True) -> Car:
    if not actor.is_admin:
        raise Forbidden("Only administrators can verify cars")
    car.is_verified = verified
    car.save(update_fields=["is_verified", "updated_at"])
    logger.info("car.verification_changed", car_id=car.pk, verified=verified)
    return car


def delete_car(actor: Actor, car: Car) -> None:
    if not actor.is_admin and car.owner_id != actor.id:
        raise Forbidden("You can only delete your own cars")
    if car.has_blocking_bookings():
        raise ValidationError(
            "Car has confirmed or active bookings and cannot be deleted",
            code="CAR_HAS_ACTIVE_BOOKINGS",
        )
    car_id = car.pk
    car.delete()
    logger.info("car.deleted", car_id=car_id, actor_id=actor.id)
