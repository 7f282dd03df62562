"""In-process holder for the association's current billing configuration"""

import logging
import threading
from typing import Any

from dues_gateway.domain.billing_config import normalize_billing_config
from dues_gateway.domain.models import BillingConfig

logger = logging.getLogger(__name__)


class BillingConfigStore:
    """
    Current BillingConfig snapshot, replaced whenever the owner pushes a new
    store record.

    The holder does not subscribe to anything: whoever listens to the live
    configuration calls apply() on every update. Readers always get a complete
    frozen snapshot; a debt computed with it never sees a half-applied update.
    """

    def __init__(self, defaults: BillingConfig):
        self._defaults = defaults
        self._current = defaults
        self._lock = threading.Lock()

    def current(self) -> BillingConfig:
        return self._current

    def apply(self, raw: Any) -> BillingConfig:
        """Normalize a raw store record and make it the current configuration"""
        config = normalize_billing_config(raw, self._defaults)
        with self._lock:
            self._current = config

        logger.info(
            "Billing configuration updated",
            extra={
                "base_amount": config.base_amount,
                "closing_day": config.closing_day,
                "cutoff_date": config.cutoff_date,
            },
        )
        return config

    def reset(self) -> BillingConfig:
        with self._lock:
            self._current = self._defaults
        logger.info("Billing configuration reset to defaults")
        return self._defaults
