"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerbook.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Entry as ORMEntry,
    Loan as ORMLoan,
    LoanRepayment as ORMLoanRepayment,
)
from ledgerbook.database.mappers import (
    account_to_domain,
    category_to_domain,
    entry_to_domain,
    entry_to_view,
    loan_to_domain,
)
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    CategoryType,
    EntryType,
    InterestMethod,
    LoanDirection,
    RepaymentType,
    TransferLeg,
)


def _orm_account(account_id=1, name="Savings"):
    now = datetime.now(UTC)
    return ORMAccount(
        id=account_id,
        name=name,
        account_type="bank",
        description=None,
        opening_balance=Decimal("10.00"),
        current_balance=Decimal("12.50"),
        created_at=now,
        updated_at=now,
    )


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        orm_account = _orm_account()
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.account_type == AccountType.BANK
        assert domain_account.current_balance == Decimal("12.50")
        assert domain_account.created_at == orm_account.created_at


class TestCategoryMapper:
    """Tests for Category mapper."""

    def test_category_to_domain(self):
        orm_category = ORMCategory(
            id=3, name="Groceries", category_type="expense", parent_id=1, created_at=datetime.now(UTC)
        )
        category = category_to_domain(orm_category)

        assert category.category_type == CategoryType.EXPENSE
        assert category.parent_id == 1


class TestEntryMapper:
    """Tests for Entry mappers."""

    def _orm_entry(self, **overrides):
        now = datetime.now(UTC)
        values = dict(
            id=7,
            entry_type="transfer",
            date=date(2024, 1, 15),
            amount=Decimal("99.99"),
            description="ATM",
            notes=None,
            account_id=1,
            category_id=None,
            linked_loan_id=None,
            transfer_group_id="3f1c0c1e-0000-4000-8000-000000000000",
            counter_account_id=2,
            transfer_leg="debit",
            created_at=now,
            updated_at=now,
        )
        values.update(overrides)
        return ORMEntry(**values)

    def test_transfer_leg_is_mapped(self):
        entry = entry_to_domain(self._orm_entry())

        assert entry.entry_type == EntryType.TRANSFER
        assert entry.transfer_leg == TransferLeg.DEBIT
        assert entry.signed_amount == Decimal("-99.99")

    def test_income_has_no_leg(self):
        entry = entry_to_domain(
            self._orm_entry(entry_type="income", transfer_leg=None, transfer_group_id=None, counter_account_id=None)
        )
        assert entry.transfer_leg is None

    def test_entry_to_view_uses_relationship_names(self):
        orm_entry = self._orm_entry()
        orm_entry.account = _orm_account(1, "Savings")
        orm_entry.counter_account = _orm_account(2, "Wallet")

        view = entry_to_view(orm_entry)

        assert view.account_name == "Savings"
        assert view.counter_account_name == "Wallet"
        assert view.category_name is None


class TestLoanMapper:
    """Tests for Loan mapper."""

    def test_loan_to_domain_includes_repayments(self):
        now = datetime.now(UTC)
        orm_loan = ORMLoan(
            id=1,
            counterparty="Ravi",
            direction="GIVEN",
            principal=Decimal("1000"),
            interest_rate=Decimal("12"),
            interest_method="COMPOUND",
            start_date=date(2024, 1, 1),
            notes=None,
            created_at=now,
            updated_at=now,
        )
        orm_loan.repayments = [
            ORMLoanRepayment(
                id=1,
                loan_id=1,
                amount=Decimal("50"),
                repayment_type="INTEREST",
                date=date(2024, 2, 1),
                notes=None,
                created_at=now,
            )
        ]

        loan = loan_to_domain(orm_loan)

        assert loan.direction == LoanDirection.GIVEN
        assert loan.interest_method == InterestMethod.COMPOUND
        assert loan.repayments[0].repayment_type == RepaymentType.INTEREST
        assert loan.interest_paid == Decimal("50")
