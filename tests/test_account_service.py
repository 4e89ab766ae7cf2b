"""Tests for the account service."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_account_sets_current_balance_to_opening(account_service):
    account = account_service.create_account(
        name="HDFC Savings", account_type="bank", opening_balance="25000.50", description="Salary account"
    )

    assert account.account_type == AccountType.BANK
    assert account.opening_balance == Decimal("25000.50")
    assert account.current_balance == Decimal("25000.50")
    assert account.description == "Salary account"


def test_create_account_defaults_to_zero_balance(account_service):
    account = account_service.create_account(name="Wallet", account_type=AccountType.CASH)
    assert account.current_balance == Decimal("0")


def test_create_account_validation(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account(name="  ", account_type="bank")
    with pytest.raises(ValidationError, match="account type"):
        account_service.create_account(name="Savings", account_type="savings")
    with pytest.raises(ValidationError):
        account_service.create_account(name="Savings", account_type="bank", opening_balance="lots")


def test_create_account_duplicate_name(account_service, sample_account):
    with pytest.raises(ConflictError, match="already exists"):
        account_service.create_account(name="Test Account", account_type="cash")


def test_list_accounts_sorted_by_name(account_service):
    account_service.create_account(name="Zeta", account_type="bank")
    account_service.create_account(name="Alpha", account_type="cash")

    names = [a.name for a in account_service.list_accounts()]
    assert names == ["Alpha", "Zeta"]


def test_get_account_by_name(account_service, sample_account):
    assert account_service.get_account_by_name("Test Account").id == sample_account.id
    assert account_service.get_account_by_name("Missing") is None


def test_require_account_missing(account_service):
    with pytest.raises(NotFoundError, match="Account 999 not found"):
        account_service.require_account(999)


def test_update_account_keeps_balance(account_service, sample_account):
    updated = account_service.update_account(
        sample_account.id, name="Renamed", account_type="investment", description="Brokerage"
    )

    assert updated.name == "Renamed"
    assert updated.account_type == AccountType.INVESTMENT
    assert updated.description == "Brokerage"
    assert updated.current_balance == sample_account.current_balance


def test_update_account_empty_description_clears(account_service):
    account = account_service.create_account(
        name="Card", account_type="credit_card", description="Old"
    )
    updated = account_service.update_account(account.id, description="")
    assert updated.description is None


def test_update_account_duplicate_name(account_service, sample_account, wallet):
    with pytest.raises(ConflictError):
        account_service.update_account(wallet.id, name="Test Account")


def test_delete_account_without_entries(account_service, sample_account):
    account_service.delete_account(sample_account.id)
    assert account_service.get_account(sample_account.id) is None


def test_delete_account_with_entries_is_blocked(account_service, ledger, sample_account):
    ledger.create_income_or_expense(
        entry_type="expense",
        date=date(2024, 1, 15),
        amount="10",
        description="Coffee",
        account_id=sample_account.id,
    )

    with pytest.raises(ConflictError, match="1 entry"):
        account_service.delete_account(sample_account.id)
    assert account_service.get_account(sample_account.id) is not None


def test_delete_account_referenced_by_transfer_is_blocked(account_service, ledger, sample_account, wallet):
    ledger.create_transfer(
        date=date(2024, 1, 15),
        amount="50",
        description="",
        from_account_id=sample_account.id,
        to_account_id=wallet.id,
    )

    # Both legs reference each side: one as owner, the other as counter account
    with pytest.raises(ConflictError, match="2 entries"):
        account_service.delete_account(wallet.id)
    assert account_service.get_account(wallet.id) is not None


def test_delete_missing_account(account_service):
    with pytest.raises(NotFoundError):
        account_service.delete_account(42)


def test_reconcile_account(account_service, ledger, sample_account, wallet):
    ledger.create_income_or_expense(
        entry_type="income",
        date=date(2024, 1, 1),
        amount="500",
        description="Refund",
        account_id=sample_account.id,
    )
    ledger.create_transfer(
        date=date(2024, 1, 2),
        amount="300",
        description="",
        from_account_id=sample_account.id,
        to_account_id=wallet.id,
    )

    stored, derived = account_service.reconcile_account(sample_account.id)
    assert stored == Decimal("1200.00")
    assert derived == stored
