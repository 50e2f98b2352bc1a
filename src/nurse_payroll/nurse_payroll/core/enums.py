from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles known to the user directory."""

    ADMIN = "admin"
    NURSE = "nurse"
    STAFF = "staff"


class RateKey(str, Enum):
    """Setting keys the salary calculator reads from the rate store."""

    DISTANCE_RATE = "distance_rate_per_km"
    TIME_RATE = "time_rate_per_hour"
    VITAL_RATE = "vital_rate_per_record"
