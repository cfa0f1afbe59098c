"""Tests for manual contributions and contribution history."""

import re
from datetime import date
from decimal import Decimal

import pytest

from churchregister.domain.entities import CONTRIBUTION_TYPE_CASH
from churchregister.domain.errors import NotFoundError, ValidationError


def test_add_one_off_contribution(contribution_service, temp_db, sample_members):
    contribution_id = contribution_service.add_one_off_contribution(
        member_id=sample_members["brown"],
        amount=Decimal("20.00"),
        contribution_date=date(2024, 2, 4),
        created_by="treasurer",
        description="Harvest gift",
    )

    [contribution] = contribution_service.get_history(sample_members["brown"])
    assert contribution.id == contribution_id
    assert contribution.amount == Decimal("20.00")
    assert contribution.date == date(2024, 2, 4)
    assert contribution.description == "Harvest gift"
    assert contribution.contribution_type_id == CONTRIBUTION_TYPE_CASH
    assert contribution.contribution_type == "Cash"
    assert contribution.manual_contribution is True
    assert contribution.source_transaction_id is None
    assert re.fullmatch(r"MANUAL-\d{14}", contribution.transaction_ref)


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5.00")])
def test_add_one_off_contribution_requires_positive_amount(contribution_service, sample_members, amount):
    with pytest.raises(ValidationError):
        contribution_service.add_one_off_contribution(
            sample_members["brown"], amount, date(2024, 2, 4), "treasurer"
        )


def test_add_one_off_contribution_unknown_member(contribution_service):
    with pytest.raises(NotFoundError):
        contribution_service.add_one_off_contribution(999, Decimal("5.00"), date(2024, 2, 4), "treasurer")


def test_manual_contribution_does_not_touch_bank_credits(
    contribution_service, import_service, temp_db, sample_members, parsed_transactions
):
    import_service.import_transactions(parsed_transactions, "treasurer")

    contribution_service.add_one_off_contribution(
        sample_members["smith"], Decimal("5.00"), date(2024, 2, 4), "treasurer"
    )

    assert len(temp_db.list_credit_transactions(unprocessed_only=True)) == 3


def test_history_newest_first_and_filtered(contribution_service, sample_members):
    member_id = sample_members["smith"]
    for day in (3, 10, 17):
        contribution_service.add_one_off_contribution(
            member_id, Decimal(day), date(2024, 3, day), "treasurer"
        )

    history = contribution_service.get_history(member_id)
    assert [c.date.day for c in history] == [17, 10, 3]

    filtered = contribution_service.get_history(
        member_id, start_date=date(2024, 3, 4), end_date=date(2024, 3, 17)
    )
    assert [c.date.day for c in filtered] == [17, 10]


def test_history_only_includes_member(contribution_service, sample_members):
    contribution_service.add_one_off_contribution(
        sample_members["smith"], Decimal("5.00"), date(2024, 2, 4), "treasurer"
    )

    assert contribution_service.get_history(sample_members["jones"]) == []


def test_history_unknown_member(contribution_service):
    with pytest.raises(NotFoundError):
        contribution_service.get_history(999)
