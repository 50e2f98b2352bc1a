from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a user from the identity directory.

    Nurses carry a `nurse_id` string distinct from the numeric `user_id`.
    """

    user_id: int
    nurse_id: Optional[str]
    full_name: str
    role: Role
    is_active: bool = True
