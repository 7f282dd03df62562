"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class BillingConfig:
    """Association billing rules, owned by the configuration store"""

    base_amount: Decimal  # per closed sub-period (half the monthly dues)
    closing_day: int  # closes sub-period A; sub-period B closes at month end
    due_day: int
    grace_period_days: int
    late_fee_pct: Decimal
    penalty_fee_pct: Decimal
    cutoff_date: date

    # Extras carried through for receipts and other consumers
    site: Optional[str] = None
    receipt_series: Optional[str] = None
    current_receipt_number: Optional[int] = None
    early_payment_pct: Optional[Decimal] = None


@dataclass(frozen=True)
class DebtResult:
    """Closed sub-periods owed as of range_end"""

    sub_periods_owed: int
    amount_owed: Decimal
    range_start: date
    range_end: date


@dataclass(frozen=True)
class MemberStanding:
    """Debt plus the badge a member gets in the registry"""

    debt: DebtResult
    delinquent: bool
    band: str  # "current" | "in_arrears" | "non_contributor"
    label: str  # "contributor" | "non_contributor"
