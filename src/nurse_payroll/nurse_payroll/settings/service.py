from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..common.validators import require_non_empty, require_rate
from ..core.enums import RateKey
from ..core.exceptions import NotFoundError
from .model import PayRates, RateSetting, RateSettingPatch
from .repository import RateSettingRepository

logger = logging.getLogger(__name__)


class RateConfigurationService:
    """Use case: read and administer the pay-rate table.

    Every read goes to the repository; there is no cache, so a rate change is
    seen by the next calculation.
    """

    def __init__(self, settings: RateSettingRepository):
        self._settings = settings

    def get(self, key: str) -> RateSetting:
        key = require_non_empty(key, "setting_key")
        setting = self._settings.get_by_key(key)
        if not setting:
            raise NotFoundError(f"Setting {key!r} not found")
        return setting

    def get_value(self, key: str) -> Decimal:
        return self.get(key).value

    def get_all(self) -> dict[str, RateSetting]:
        return {s.key: s for s in self._settings.list_all()}

    def set(
        self,
        key: str,
        value: object,
        *,
        updated_by: Optional[int] = None,
        description: Optional[str] = None,
    ) -> RateSetting:
        key = require_non_empty(key, "setting_key")
        number = require_rate(value, "setting_value")
        self._settings.upsert(key=key, value=number, description=description, updated_by=updated_by)
        logger.info("Rate setting %s set to %s (by user %s)", key, number, updated_by)
        return self.get(key)

    def create(
        self,
        key: str,
        value: object,
        *,
        description: Optional[str] = None,
        updated_by: Optional[int] = None,
    ) -> RateSetting:
        key = require_non_empty(key, "setting_key")
        number = require_rate(value, "setting_value")
        self._settings.insert(key=key, value=number, description=description, updated_by=updated_by)
        logger.info("Rate setting %s created with %s", key, number)
        return self.get(key)

    def update(self, key: str, patch: RateSettingPatch) -> RateSetting:
        key = require_non_empty(key, "setting_key")
        if patch.value is not None:
            patch = RateSettingPatch(
                value=require_rate(patch.value, "setting_value"),
                description=patch.description,
                updated_by=patch.updated_by,
            )
        if not self._settings.update(key, patch):
            raise NotFoundError(f"Setting {key!r} not found")
        if not patch.is_empty():
            logger.info("Rate setting %s updated", key)
        return self.get(key)

    def delete(self, key: str) -> None:
        key = require_non_empty(key, "setting_key")
        if not self._settings.delete(key):
            raise NotFoundError(f"Setting {key!r} not found")
        logger.info("Rate setting %s deleted", key)

    def current_rates(self) -> PayRates:
        """Read the three calculator rates in one pass over the table."""
        settings = self.get_all()
        values: dict[RateKey, Decimal] = {}
        for rate_key in RateKey:
            setting = settings.get(rate_key.value)
            if setting is None:
                raise NotFoundError(f"Setting {rate_key.value!r} not found")
            values[rate_key] = setting.value
        return PayRates(
            distance_rate=values[RateKey.DISTANCE_RATE],
            time_rate=values[RateKey.TIME_RATE],
            vital_rate=values[RateKey.VITAL_RATE],
        )
