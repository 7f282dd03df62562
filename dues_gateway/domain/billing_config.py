"""Billing configuration - defaults and normalization of raw store records"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dues_gateway.config import Settings
from dues_gateway.domain.models import BillingConfig
from dues_gateway.utils.date_utils import coerce_date


def default_billing_config(settings: Settings) -> BillingConfig:
    """Configuration used before (or instead of) a stored record"""
    return BillingConfig(
        base_amount=settings.billing_monthly_amount / 2,
        closing_day=settings.billing_closing_day,
        due_day=settings.billing_due_day,
        grace_period_days=settings.billing_grace_period_days,
        late_fee_pct=settings.billing_late_fee_pct,
        penalty_fee_pct=settings.billing_penalty_fee_pct,
        cutoff_date=settings.billing_cutoff_date,
    )


def _to_decimal(value: Any, fallback: Optional[Decimal]) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return fallback
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return fallback
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return fallback
    return number if number.is_finite() else fallback


def _to_int(value: Any, fallback: Optional[int]) -> Optional[int]:
    number = _to_decimal(value, None)
    if number is None or number != number.to_integral_value():
        return fallback
    return int(number)


def _to_str(value: Any, fallback: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return fallback


def _bounded(value, fallback, low, high=None):
    """`value` if parsed and within [low, high], otherwise `fallback`"""
    if value is None or value < low or (high is not None and value > high):
        return fallback
    return value


def normalize_billing_config(raw: Any, defaults: BillingConfig) -> BillingConfig:
    """
    Build a BillingConfig from the association's stored configuration record.

    The store keeps Spanish keys and a MONTHLY amount; the debt engine charges
    per half-month sub-period, so the monthly amount is halved.

    Every field falls back to `defaults` independently when it is missing or
    not usable:
    - numbers accept numeric strings, reject blanks / NaN / infinity
    - closing and due days must be 1-31
    - amounts, percentages and grace days must not be negative
    - cutoff date must parse as a calendar date
    - optional extras stay None when absent

    A record that is not a mapping (e.g. an empty store node) yields `defaults`.
    """
    if not isinstance(raw, Mapping):
        return defaults

    monthly_amount = _bounded(_to_decimal(raw.get("montoMensual"), None), defaults.base_amount * 2, 0)

    return BillingConfig(
        base_amount=monthly_amount / 2,
        closing_day=_bounded(_to_int(raw.get("diaCierre"), None), defaults.closing_day, 1, 31),
        due_day=_bounded(_to_int(raw.get("diaVencimiento"), None), defaults.due_day, 1, 31),
        grace_period_days=_bounded(_to_int(raw.get("diasProntoPago"), None), defaults.grace_period_days, 0),
        late_fee_pct=_bounded(_to_decimal(raw.get("porcentajeMorosidad"), None), defaults.late_fee_pct, 0),
        penalty_fee_pct=_bounded(_to_decimal(raw.get("porcentajeSancion"), None), defaults.penalty_fee_pct, 0),
        cutoff_date=coerce_date(_to_str(raw.get("fechaCorteISO"), None), fallback=defaults.cutoff_date),
        site=_to_str(raw.get("sede"), None),
        receipt_series=_to_str(raw.get("serieComprobantes"), None),
        current_receipt_number=_to_int(raw.get("numeroComprobanteActual"), None),
        early_payment_pct=_bounded(_to_decimal(raw.get("porcentajeProntoPago"), None), None, 0),
    )
