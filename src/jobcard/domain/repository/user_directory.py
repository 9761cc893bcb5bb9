"""Abstract lookup of shop users.

Defined in the domain layer so the domain never depends on how accounts
are stored.  Only the reads the job lifecycle needs are part of the
interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jobcard.domain.model.user import Role, User


class UserDirectory(ABC):

    @abstractmethod
    def find_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def find_by_role_and_id(self, role: Role, user_id: str) -> User | None:
        """Return the user only if it exists *and* has *role*."""
