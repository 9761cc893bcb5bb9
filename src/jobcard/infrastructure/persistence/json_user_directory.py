"""JSON-file-backed user directory.

Accounts are owned by another system; this file is a local read model of
them.  ``save`` exists so the CLI can register users for local use.
"""

from __future__ import annotations

from pathlib import Path

from jobcard.domain.model.user import Role, User
from jobcard.domain.repository.user_directory import UserDirectory
from jobcard.infrastructure.persistence.json_store import JsonFileStore


class JsonUserDirectory(UserDirectory):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    def find_by_id(self, user_id: str) -> User | None:
        for raw in self._store.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def find_by_role_and_id(self, role: Role, user_id: str) -> User | None:
        user = self.find_by_id(user_id)
        if user is None or user.role is not role:
            return None
        return user

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._store.load()]

    def save(self, user: User) -> None:
        with self._store.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == user.id:
                    records[i] = self._to_raw(user)
                    break
            else:
                records.append(self._to_raw(user))

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "name": user.name,
            "role": user.role.value,
            "email": user.email,
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            name=raw["name"],
            role=Role(raw["role"]),
            email=raw.get("email"),
        )
