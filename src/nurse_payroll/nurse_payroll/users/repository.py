from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Read-only view of the user directory the salary engine consumes."""

    def find_by_nurse_id(self, nurse_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_active_nurses(self) -> Sequence[User]:
        raise NotImplementedError
