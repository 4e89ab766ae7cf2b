"""Tests for the loan service."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import InterestMethod, LoanDirection, RepaymentType
from ledgerbook.domain.errors import NotFoundError, ValidationError


def test_create_loan(loan_service, sample_loan):
    assert sample_loan.counterparty == "Ravi"
    assert sample_loan.direction == LoanDirection.GIVEN
    assert sample_loan.principal == Decimal("100000.00")
    assert sample_loan.interest_rate == Decimal("12")
    assert sample_loan.interest_method == InterestMethod.SIMPLE
    assert sample_loan.start_date == date(2024, 1, 1)
    assert sample_loan.repayments == ()


def test_create_loan_validation(loan_service):
    with pytest.raises(ValidationError):
        loan_service.create_loan(
            counterparty="", direction="GIVEN", principal="100", start_date="2024-01-01"
        )
    with pytest.raises(ValidationError):
        loan_service.create_loan(
            counterparty="Asha", direction="LENT", principal="100", start_date="2024-01-01"
        )
    with pytest.raises(ValidationError):
        loan_service.create_loan(
            counterparty="Asha", direction="TAKEN", principal="0", start_date="2024-01-01"
        )
    with pytest.raises(ValidationError, match="negative"):
        loan_service.create_loan(
            counterparty="Asha",
            direction="TAKEN",
            principal="100",
            start_date="2024-01-01",
            interest_rate="-1",
        )


def test_list_loans_newest_first(loan_service, sample_loan):
    second = loan_service.create_loan(
        counterparty="Bank", direction="TAKEN", principal="50000", start_date=date(2024, 2, 1)
    )
    assert [loan.id for loan in loan_service.list_loans()] == [second.id, sample_loan.id]


def test_update_loan(loan_service, sample_loan):
    updated = loan_service.update_loan(
        sample_loan.id, interest_rate="10.5", interest_method="compound", notes="Renegotiated"
    )

    assert updated.interest_rate == Decimal("10.5")
    assert updated.interest_method == InterestMethod.COMPOUND
    assert updated.notes == "Renegotiated"
    assert updated.principal == sample_loan.principal


def test_update_missing_loan(loan_service):
    with pytest.raises(NotFoundError, match="Loan 5"):
        loan_service.update_loan(5, notes="x")


def test_record_repayment(loan_service, sample_loan):
    repayment = loan_service.record_repayment(
        sample_loan.id, amount="25000", repayment_type="principal", date="2024-04-01", notes="Cheque"
    )

    assert repayment.loan_id == sample_loan.id
    assert repayment.repayment_type == RepaymentType.PRINCIPAL
    assert repayment.amount == Decimal("25000")

    loan = loan_service.require_loan(sample_loan.id)
    assert loan.principal_repaid == Decimal("25000")
    assert loan.total_repaid == Decimal("25000")


def test_record_repayment_validation(loan_service, sample_loan):
    with pytest.raises(ValidationError):
        loan_service.record_repayment(sample_loan.id, amount="0", repayment_type="INTEREST", date="2024-04-01")
    with pytest.raises(ValidationError):
        loan_service.record_repayment(sample_loan.id, amount="10", repayment_type="FEES", date="2024-04-01")
    with pytest.raises(NotFoundError):
        loan_service.record_repayment(999, amount="10", repayment_type="INTEREST", date="2024-04-01")


def test_repayments_do_not_touch_accounts(loan_service, account_service, sample_loan, sample_account):
    loan_service.record_repayment(sample_loan.id, amount="500", repayment_type="INTEREST", date="2024-02-01")
    assert account_service.require_account(sample_account.id).current_balance == Decimal("1000.00")


def test_list_repayments_oldest_first(loan_service, sample_loan):
    loan_service.record_repayment(sample_loan.id, amount="200", repayment_type="INTEREST", date="2024-06-01")
    loan_service.record_repayment(sample_loan.id, amount="100", repayment_type="INTEREST", date="2024-03-01")

    repayments = loan_service.list_repayments(sample_loan.id)
    assert [r.date for r in repayments] == [date(2024, 3, 1), date(2024, 6, 1)]


def test_calculate_accrual(loan_service, sample_loan):
    loan_service.record_repayment(sample_loan.id, amount="40000", repayment_type="PRINCIPAL", date="2024-03-01")
    loan_service.record_repayment(sample_loan.id, amount="1000", repayment_type="INTEREST", date="2024-06-01")

    accrual = loan_service.calculate_accrual(sample_loan.id, date(2024, 12, 31))

    assert accrual.outstanding_principal == Decimal("60000.00")
    assert accrual.accrued_interest == Decimal("7200")
    assert accrual.interest_due == Decimal("6200")
    assert accrual.total_due == Decimal("66200")


def test_calculate_accrual_defaults_to_today(loan_service, sample_loan):
    accrual = loan_service.calculate_accrual(sample_loan.id)
    assert accrual.evaluation_date == date.today()


def test_list_accruals(loan_service, sample_loan):
    results = loan_service.list_accruals(date(2024, 12, 31))

    assert len(results) == 1
    loan, accrual = results[0]
    assert loan.id == sample_loan.id
    assert accrual.total_due == Decimal("112000")


def test_delete_loan_removes_repayments_and_unlinks_entries(loan_service, ledger, sample_loan, sample_account):
    loan_service.record_repayment(sample_loan.id, amount="10", repayment_type="INTEREST", date="2024-02-01")
    entry = ledger.create_income_or_expense(
        entry_type="expense",
        date=date(2024, 1, 1),
        amount="100000",
        description="Lent to Ravi",
        account_id=sample_account.id,
        linked_loan_id=sample_loan.id,
    )

    loan_service.delete_loan(sample_loan.id)

    assert loan_service.get_loan(sample_loan.id) is None
    assert ledger.require_entry(entry.id).linked_loan_id is None
    with pytest.raises(NotFoundError):
        loan_service.list_repayments(sample_loan.id)
