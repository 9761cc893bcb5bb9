"""Users, roles and capabilities.

Accounts themselves are managed elsewhere; the core only needs to know
who someone is and what their role allows them to do.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from jobcard.domain.exceptions import NotAuthorizedError, ValidationError


class Role(Enum):
    MANAGER = "manager"
    MECHANIC = "mechanic"
    CUSTOMER = "customer"

    @staticmethod
    def parse(raw: str) -> Role:
        try:
            return Role(raw.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(r.value for r in Role)
            raise ValidationError(f"Unknown role '{raw}' (expected one of: {allowed})") from exc


class Capability(Enum):
    ASSIGN_JOBS = "assign_jobs"
    PERFORM_JOBS = "perform_jobs"
    MANAGE_INVENTORY = "manage_inventory"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.MANAGER: frozenset({Capability.ASSIGN_JOBS, Capability.MANAGE_INVENTORY}),
    Role.MECHANIC: frozenset({Capability.PERFORM_JOBS}),
    Role.CUSTOMER: frozenset(),
}


@dataclass(frozen=True)
class User:
    id: str
    name: str
    role: Role
    email: str | None = None

    def can(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES[self.role]


def require_capability(user: User, capability: Capability) -> None:
    """Raise NotAuthorizedError unless *user*'s role grants *capability*."""
    if not user.can(capability):
        raise NotAuthorizedError(
            f"User '{user.id}' ({user.role.value}) lacks the "
            f"'{capability.value}' capability"
        )
