"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from dues_gateway.domain.models import BillingConfig, MemberStanding

# Join dates are taken as stored in the registry and read leniently by the
# debt engine, so they are not validated as dates here.
JoinDateValue = Union[int, float, str, None]


class BillingConfigSchema(BaseModel):
    """Normalized billing configuration"""

    base_amount: Decimal = Field(..., ge=0, description="Amount per closed half-month sub-period")
    closing_day: int = Field(..., ge=1, le=31, description="Day closing the first sub-period")
    due_day: int = Field(..., ge=1, le=31)
    grace_period_days: int = Field(..., ge=0)
    late_fee_pct: Decimal = Field(..., ge=0)
    penalty_fee_pct: Decimal = Field(..., ge=0)
    cutoff_date: date
    site: Optional[str] = None
    receipt_series: Optional[str] = None
    current_receipt_number: Optional[int] = None
    early_payment_pct: Optional[Decimal] = None

    @classmethod
    def from_domain(cls, config: BillingConfig) -> "BillingConfigSchema":
        return cls(
            base_amount=config.base_amount,
            closing_day=config.closing_day,
            due_day=config.due_day,
            grace_period_days=config.grace_period_days,
            late_fee_pct=config.late_fee_pct,
            penalty_fee_pct=config.penalty_fee_pct,
            cutoff_date=config.cutoff_date,
            site=config.site,
            receipt_series=config.receipt_series,
            current_receipt_number=config.current_receipt_number,
            early_payment_pct=config.early_payment_pct,
        )

    def to_domain(self) -> BillingConfig:
        return BillingConfig(
            base_amount=self.base_amount,
            closing_day=self.closing_day,
            due_day=self.due_day,
            grace_period_days=self.grace_period_days,
            late_fee_pct=self.late_fee_pct,
            penalty_fee_pct=self.penalty_fee_pct,
            cutoff_date=self.cutoff_date,
            site=self.site,
            receipt_series=self.receipt_series,
            current_receipt_number=self.current_receipt_number,
            early_payment_pct=self.early_payment_pct,
        )


class DebtRequest(BaseModel):
    """Request body for POST /v1/debt"""

    member_id: Optional[str] = Field(None, description="Registry identifier, echoed back")
    join_date: JoinDateValue = Field(None, description="YYYY-MM-DD, YYYYMMDD or epoch milliseconds")
    evaluation_date: Optional[date] = Field(None, description="Defaults to today")
    config: Optional[BillingConfigSchema] = Field(None, description="Overrides the stored configuration")
    strict: bool = Field(False, description="Reject unreadable join dates instead of falling back")


class DebtResponse(BaseModel):
    """Debt and standing for one member"""

    member_id: Optional[str] = None
    sub_periods_owed: int
    amount_owed: Decimal
    range_start: date
    range_end: date
    delinquent: bool
    band: str
    label: str

    @classmethod
    def from_standing(cls, standing: MemberStanding, member_id: Optional[str] = None) -> "DebtResponse":
        return cls(
            member_id=member_id,
            sub_periods_owed=standing.debt.sub_periods_owed,
            amount_owed=standing.debt.amount_owed,
            range_start=standing.debt.range_start,
            range_end=standing.debt.range_end,
            delinquent=standing.delinquent,
            band=standing.band,
            label=standing.label,
        )


class MemberItem(BaseModel):
    """Single member in a batch request"""

    member_id: str = Field(..., min_length=1)
    join_date: JoinDateValue = None


class BatchDebtRequest(BaseModel):
    """Request body for POST /v1/debt/batch"""

    members: List[MemberItem] = Field(..., min_length=1)
    evaluation_date: Optional[date] = None
    strict: bool = False


class BatchDebtResponse(BaseModel):
    """Response for POST /v1/debt/batch"""

    reports: List[DebtResponse]
    total_sub_periods_owed: int
    total_amount_owed: Decimal
    delinquent_count: int
