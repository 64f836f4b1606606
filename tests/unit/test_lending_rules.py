"""
Unit Tests for loan terms and the application status state machine.

These tests verify:
1. Simple interest totals and half-up rounding
2. Amount-due arithmetic
3. Allowed and forbidden status transitions
"""

from datetime import date
from decimal import Decimal

import pytest

from loan_manager.domain.entities import ApplicationStatus, LoanApplication
from loan_manager.domain.exceptions import InvalidStatusTransitionException
from loan_manager.service.lending import (
    apply_status_transition,
    calculate_loan_terms,
    days_between,
    due_amount,
    simple_interest_total,
    to_money,
    to_rate,
    total_paid,
)


def make_application(status: ApplicationStatus = ApplicationStatus.PENDING) -> LoanApplication:
    terms = calculate_loan_terms(Decimal("1000"), Decimal("1"), date(2025, 1, 1), date(2025, 1, 31))
    return LoanApplication(
        name="Jane Doe",
        loan_amount=Decimal("1000.00"),
        rate_of_interest=Decimal("1"),
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 31),
        days_between=terms.days_between,
        total_amount=terms.total_amount,
        status=status,
        sn_no=7,
    )


# =============================================================================
# Interest Tests
# =============================================================================

class TestInterest:

    def test_one_period_at_one_percent(self):
        assert simple_interest_total(Decimal("1000"), Decimal("1"), 30) == Decimal("1010.00")

    def test_pro_rated_by_day(self):
        # 1000 * 2% * 15/30 = 10
        assert simple_interest_total(Decimal("1000"), Decimal("2"), 15) == Decimal("1010.00")

    def test_zero_days_is_principal(self):
        assert simple_interest_total(Decimal("750.25"), Decimal("5"), 0) == Decimal("750.25")

    def test_rounds_half_up_to_cents(self):
        # 100 * 1% * 1/30 = 0.0333.. -> 100.03
        assert simple_interest_total(Decimal("100"), Decimal("1"), 1) == Decimal("100.03")
        assert to_money("0.005") == Decimal("0.01")

    def test_rate_kept_to_four_places(self):
        assert to_rate(Decimal("1.23456")) == Decimal("1.2346")
        assert to_rate(1) == Decimal("1.0000")

    def test_days_between(self):
        assert days_between(date(2025, 1, 1), date(2025, 3, 2)) == 60
        assert days_between(date(2025, 1, 1), date(2025, 1, 1)) == 0

    def test_loan_terms(self):
        terms = calculate_loan_terms(Decimal("2000"), Decimal("1"), date(2025, 1, 1), date(2025, 3, 2))

        assert terms.days_between == 60
        assert terms.total_amount == Decimal("2040.00")


class TestAmountDue:

    def test_total_paid(self):
        assert total_paid([Decimal("10.10"), Decimal("0.20")]) == Decimal("10.30")
        assert total_paid([]) == Decimal("0.00")

    def test_due_amount(self):
        assert due_amount(Decimal("1010.00"), Decimal("10")) == Decimal("1000.00")

    def test_due_amount_never_negative(self):
        assert due_amount(Decimal("100"), Decimal("150")) == Decimal("0.00")


# =============================================================================
# Status Transition Tests
# =============================================================================

class TestStatusTransitions:

    def test_approve_promotes_to_borrower(self):
        application = make_application()

        transition = apply_status_transition(application, ApplicationStatus.APPROVED)

        assert transition.application.status == ApplicationStatus.APPROVED
        borrower = transition.borrower
        assert borrower is not None
        assert borrower.application_id == application.id
        assert borrower.due_date == application.end_date
        assert borrower.total_amount == Decimal("1010.00")
        assert borrower.sn_no == 7
        assert borrower.status == ApplicationStatus.APPROVED

    def test_input_is_not_mutated(self):
        application = make_application()

        apply_status_transition(application, ApplicationStatus.APPROVED)

        assert application.status == ApplicationStatus.PENDING

    def test_reject_has_no_borrower(self):
        transition = apply_status_transition(make_application(), ApplicationStatus.REJECTED)

        assert transition.application.status == ApplicationStatus.REJECTED
        assert transition.borrower is None

    @pytest.mark.parametrize(
        "current,target",
        [
            (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED),
            (ApplicationStatus.APPROVED, ApplicationStatus.APPROVED),
            (ApplicationStatus.REJECTED, ApplicationStatus.APPROVED),
            (ApplicationStatus.PENDING, ApplicationStatus.PENDING),
        ],
    )
    def test_forbidden_transitions(self, current, target):
        with pytest.raises(InvalidStatusTransitionException) as exc_info:
            apply_status_transition(make_application(current), target)

        assert exc_info.value.code == "INVALID_STATUS_TRANSITION"
