"""Identity boundary between authentication and the business logic.

Views resolve the authenticated user into an :class:`Actor` once; the
services only ever see the actor's id and a validated role.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.errors import Forbidden

from .models import CustomUser

ROLES = frozenset(CustomUser.RoleChoices.values)


@dataclass(frozen=True)
class Actor:
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == CustomUser.RoleChoices.ADMIN


SYSTEM_ACTOR = Actor(id=0, role=CustomUser.RoleChoices.ADMIN)


def actor_role(user) -> str:
    """Return the user's role, rejecting anything outside the known set."""
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return CustomUser.RoleChoices.ADMIN
    role = getattr(user, "role", None)
    if role not in ROLES:
        raise Forbidden(f"Unknown role: {role!r}", code="INVALID_ROLE")
    return role


def actor_from_user(user) -> Actor:
    return Actor(id=user.pk, role=actor_role(user))
