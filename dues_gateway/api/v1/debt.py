"""POST /v1/debt - member debt and standing endpoints"""

import time
import logging
from datetime import date
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Request

from dues_gateway.api.v1.schemas import (
    BatchDebtRequest,
    BatchDebtResponse,
    DebtRequest,
    DebtResponse,
    JoinDateValue,
)
from dues_gateway.api.dependencies import get_config_store, get_request_id
from dues_gateway.domain.config_store import BillingConfigStore
from dues_gateway.domain.exceptions import InvalidDateError
from dues_gateway.domain.models import BillingConfig, MemberStanding
from dues_gateway.domain.standing import assess_member
from dues_gateway.infrastructure.observability.metrics import record_debt_report, strict_date_rejections_counter
from dues_gateway.infrastructure.observability.logging import log_debt_batch, log_debt_report
from dues_gateway.utils.date_utils import parse_date_strict

router = APIRouter()


def _assess(join_date: JoinDateValue, config: BillingConfig, evaluation_date, strict: bool) -> MemberStanding:
    if strict:
        # raises InvalidDateError instead of the engine's silent fallback
        join_date = parse_date_strict(join_date)
    return assess_member(join_date, config, evaluation_date)


@router.post("/debt", response_model=DebtResponse)
def compute_debt(
    request_body: DebtRequest,
    request: Request,
    config_store: BillingConfigStore = Depends(get_config_store),
):
    """
    Compute closed half-month sub-periods owed by a member.

    Flow:
    1. Pick the configuration (request override or current stored one)
    2. Compute debt from the join date as of the evaluation date
    3. Classify the member's standing
    4. Record metrics and structured log
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        config = request_body.config.to_domain() if request_body.config else config_store.current()

        standing = _assess(request_body.join_date, config, request_body.evaluation_date, request_body.strict)

        duration_ms = (time.time() - start_time) * 1000
        record_debt_report(standing.band, standing.debt.sub_periods_owed)
        log_debt_report(request_id, request_body.member_id, standing.debt.sub_periods_owed, standing.band, duration_ms)

        return DebtResponse.from_standing(standing, request_body.member_id)

    except InvalidDateError as e:
        strict_date_rejections_counter.inc()
        logging.warning(f"Invalid join date: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/debt/batch", response_model=BatchDebtResponse)
def compute_debt_batch(
    request_body: BatchDebtRequest,
    request: Request,
    config_store: BillingConfigStore = Depends(get_config_store),
):
    """
    Compute debt for several members against one configuration snapshot.

    The configuration and the evaluation date are resolved once, so a
    configuration update or midnight arriving mid-batch does not split the
    batch across two rule sets or two dates.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    config = config_store.current()
    evaluation_date = request_body.evaluation_date or date.today()
    member_id = None

    try:
        standings = []
        for member in request_body.members:
            member_id = member.member_id
            standings.append(_assess(member.join_date, config, evaluation_date, request_body.strict))

        reports = []
        for member, standing in zip(request_body.members, standings):
            record_debt_report(standing.band, standing.debt.sub_periods_owed)
            reports.append(DebtResponse.from_standing(standing, member.member_id))

        duration_ms = (time.time() - start_time) * 1000
        log_debt_batch(request_id, len(reports), sum(1 for r in reports if r.delinquent), duration_ms)

        return BatchDebtResponse(
            reports=reports,
            total_sub_periods_owed=sum(r.sub_periods_owed for r in reports),
            total_amount_owed=sum((r.amount_owed for r in reports), Decimal("0")),
            delinquent_count=sum(1 for r in reports if r.delinquent),
        )

    except InvalidDateError as e:
        strict_date_rejections_counter.inc()
        logging.warning(f"Invalid join date: {e}", extra={"request_id": request_id, "member_id": member_id})
        raise HTTPException(status_code=422, detail=f"{member_id}: {e}")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "member_id": member_id})
        raise HTTPException(status_code=500, detail="Internal server error")
