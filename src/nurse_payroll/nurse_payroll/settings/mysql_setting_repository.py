from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_decimal,
    translate_integrity_errors,
)
from .model import RateSetting, RateSettingPatch
from .repository import RateSettingRepository

_COLUMNS = "setting_key, setting_value, description, updated_by, created_at, updated_at"


def _to_setting(r: dict) -> RateSetting:
    return RateSetting(
        key=r["setting_key"],
        value=normalize_mysql_decimal(r["setting_value"]),
        description=r.get("description"),
        updated_by=int(r["updated_by"]) if r.get("updated_by") is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLRateSettingRepository(RateSettingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[RateSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_settings ORDER BY setting_key")
            return [_to_setting(r) for r in fetchall(cur)]

    def get_by_key(self, key: str) -> Optional[RateSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_settings WHERE setting_key=%s", (key,))
            r = fetchone(cur)
            return _to_setting(r) if r else None

    def insert(self, *, key: str, value: Decimal, description: Optional[str], updated_by: Optional[int]) -> None:
        with translate_integrity_errors(f"Setting {key!r} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salary_settings(setting_key, setting_value, description, updated_by)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (key, value, description, updated_by),
                )

    def upsert(self, *, key: str, value: Decimal, description: Optional[str], updated_by: Optional[int]) -> None:
        with translate_integrity_errors(f"Setting {key!r} could not be written"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salary_settings(setting_key, setting_value, description, updated_by)
                    VALUES(%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        setting_value=VALUES(setting_value),
                        description=COALESCE(VALUES(description), description),
                        updated_by=VALUES(updated_by)
                    """,
                    (key, value, description, updated_by),
                )

    def update(self, key: str, patch: RateSettingPatch) -> bool:
        assignments = patch.assignments()
        if not assignments:
            return self.get_by_key(key) is not None

        set_clause = ", ".join(f"{column}=%s" for column, _ in assignments)
        params = [value for _, value in assignments] + [key]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE salary_settings SET {set_clause} WHERE setting_key=%s", tuple(params))
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when the new values equal the old ones.
            cur.execute("SELECT 1 AS found FROM salary_settings WHERE setting_key=%s", (key,))
            return fetchone(cur) is not None

    def delete(self, key: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_settings WHERE setting_key=%s", (key,))
            return cur.rowcount > 0
