from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import RateSetting, RateSettingPatch


class RateSettingRepository(Protocol):
    """Storage for salary_settings; `setting_key` is unique."""

    def list_all(self) -> Sequence[RateSetting]:
        raise NotImplementedError

    def get_by_key(self, key: str) -> Optional[RateSetting]:
        raise NotImplementedError

    def insert(self, *, key: str, value: Decimal, description: Optional[str], updated_by: Optional[int]) -> None:
        """Plain insert. Raises ConflictError if the key exists."""

        raise NotImplementedError

    def upsert(self, *, key: str, value: Decimal, description: Optional[str], updated_by: Optional[int]) -> None:
        """Insert or overwrite the value of `key` (description kept when None)."""

        raise NotImplementedError

    def update(self, key: str, patch: RateSettingPatch) -> bool:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError
