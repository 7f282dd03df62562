"""Unit tests for member standing"""

import pytest
from datetime import date
from decimal import Decimal
from dues_gateway.domain.models import DebtResult
from dues_gateway.domain.standing import assess_member, classify_arrears, determine_standing


@pytest.mark.parametrize(
    "owed, band, label",
    [
        (0, "current", "contributor"),
        (1, "in_arrears", "contributor"),
        (2, "in_arrears", "contributor"),
        (3, "non_contributor", "non_contributor"),
        (20, "non_contributor", "non_contributor"),
    ],
)
def test_classify_arrears_bands(owed, band, label):
    assert classify_arrears(owed) == (band, label)


def test_determine_standing_delinquent_flag():
    debt = DebtResult(
        sub_periods_owed=1,
        amount_owed=Decimal("25"),
        range_start=date(2025, 3, 1),
        range_end=date(2025, 3, 20),
    )
    standing = determine_standing(debt)

    assert standing.delinquent is True
    assert standing.band == "in_arrears"
    assert standing.debt is debt


def test_assess_member_up_to_date(billing_config):
    standing = assess_member("2025-03-01", billing_config, evaluation_date=date(2025, 3, 10))

    assert standing.delinquent is False
    assert standing.band == "current"
    assert standing.debt.sub_periods_owed == 0


def test_assess_member_non_contributor(billing_config):
    # Mar 14, Mar 31, Apr 14 closed
    standing = assess_member("2025-03-01", billing_config, evaluation_date=date(2025, 4, 20))

    assert standing.debt.sub_periods_owed == 3
    assert standing.delinquent is True
    assert standing.label == "non_contributor"
