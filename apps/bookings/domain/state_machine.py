"""
Booking State Machine

    pending ──► confirmed ──► active ──► completed
       │            │            │
       └──────► cancelled ◄──────┘

Every legal edge lists the booking roles allowed to take it. ``completed``
and ``cancelled`` are terminal. Setting the current status again is not
an edge and is rejected like any other illegal pair.
"""

from typing import FrozenSet

from shared.domain.errors import Forbidden, InvalidStatusTransition

PENDING = 'pending'
CONFIRMED = 'confirmed'
ACTIVE = 'active'
COMPLETED = 'completed'
CANCELLED = 'cancelled'

STATUSES = (PENDING, CONFIRMED, ACTIVE, COMPLETED, CANCELLED)

# Roles a user can hold relative to one booking
ADMIN = 'admin'
OWNER = 'owner'
RENTER = 'renter'

TRANSITIONS = {
    (PENDING, CONFIRMED): frozenset({OWNER, ADMIN}),
    (PENDING, CANCELLED): frozenset({RENTER, ADMIN}),
    (CONFIRMED, ACTIVE): frozenset({OWNER, ADMIN}),
    (CONFIRMED, CANCELLED): frozenset({OWNER, ADMIN}),
    (ACTIVE, COMPLETED): frozenset({OWNER, ADMIN}),
    (ACTIVE, CANCELLED): frozenset({OWNER, ADMIN}),
}


def booking_roles(actor, renter_id: int, owner_id: int) -> FrozenSet[str]:
    """Roles ``actor`` holds for a booking of ``renter_id`` on a car of ``owner_id``."""
    roles = set()
    if actor.is_admin:
        roles.add(ADMIN)
    if actor.id == owner_id:
        roles.add(OWNER)
    if actor.id == renter_id:
        roles.add(RENTER)
    return frozenset(roles)


def is_legal(current: str, target: str) -> bool:
    return (current, target) in TRANSITIONS


def ensure_stakeholder(roles: FrozenSet[str]) -> None:
    if not roles:
        raise Forbidden("You do not have access to this booking")


def ensure_transition(roles: FrozenSet[str], current: str, target: str) -> None:
    """
    Validate a status change for an actor holding ``roles``.

    Raises:
        Forbidden: actor is not a stakeholder, or the edge is legal but
            reserved to other roles
        InvalidStatusTransition: the pair is not an edge of the graph
    """
    ensure_stakeholder(roles)
    if not is_legal(current, target):
        raise InvalidStatusTransition(current, target)
    if not roles & TRANSITIONS[(current, target)]:
        raise Forbidden(
            f"You are not allowed to change booking status from {current} to {target}",
            code="TRANSITION_NOT_PERMITTED",
        )
