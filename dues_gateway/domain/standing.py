"""Member standing - delinquency flag and registry badge derived from debt"""

from datetime import date, datetime
from typing import Any

from dues_gateway.domain.debt import calculate_debt
from dues_gateway.domain.models import BillingConfig, DebtResult, MemberStanding

# Sub-periods owed from which a member is no longer counted as a contributor
NON_CONTRIBUTOR_THRESHOLD = 3


def classify_arrears(sub_periods_owed: int) -> tuple[str, str]:
    """
    Map owed sub-periods to the registry badge.

    Bands:
    - 0:    current          (contributor)
    - 1-2:  in_arrears       (still a contributor, shown as a warning)
    - 3+:   non_contributor

    Returns: (band, label)
    """
    if sub_periods_owed < 1:
        return "current", "contributor"
    elif sub_periods_owed < NON_CONTRIBUTOR_THRESHOLD:
        return "in_arrears", "contributor"
    else:
        return "non_contributor", "non_contributor"


def determine_standing(debt: DebtResult) -> MemberStanding:
    band, label = classify_arrears(debt.sub_periods_owed)
    return MemberStanding(
        debt=debt,
        delinquent=debt.sub_periods_owed > 0,
        band=band,
        label=label,
    )


def assess_member(
    join_date: Any,
    config: BillingConfig,
    evaluation_date: date | datetime | None = None,
) -> MemberStanding:
    """Main entry point: debt for a member's join date plus the resulting standing"""
    debt = calculate_debt(join_date, config, evaluation_date)
    return determine_standing(debt)
