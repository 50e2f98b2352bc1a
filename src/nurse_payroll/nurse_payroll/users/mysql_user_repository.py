from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        nurse_id=row.get("nurse_id"),
        full_name=row.get("full_name") or "",
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_nurse_id(self, nurse_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, nurse_id, full_name, role, is_active
                FROM users
                WHERE nurse_id=%s
                """,
                (nurse_id,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_active_nurses(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, nurse_id, full_name, role, is_active
                FROM users
                WHERE role=%s AND is_active=1 AND nurse_id IS NOT NULL
                ORDER BY nurse_id
                """,
                (Role.NURSE.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]
