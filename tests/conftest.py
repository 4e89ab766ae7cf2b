"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entry import EntryLedgerService
from ledgerbook.domain.loan import LoanService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen_db(temp_db):
    """Return a factory that opens a second handle on the temporary database.

    CLI commands write through their own connection; tests read the result
    through a fresh handle so nothing cached in ``temp_db`` is involved.
    """
    opened = []

    def _open():
        db = create_sqlite_database(database_path=temp_db.database_path)
        db.connect()
        opened.append(db)
        return db

    yield _open

    for db in opened:
        db.disconnect()


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def ledger(temp_db):
    """Create an EntryLedgerService with a temporary database."""
    return EntryLedgerService(temp_db)


@pytest.fixture
def loan_service(temp_db):
    """Create a LoanService with a temporary database."""
    return LoanService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a bank account with an opening balance of 1000.00."""
    return account_service.create_account(
        name="Test Account", account_type="bank", opening_balance=Decimal("1000.00")
    )


@pytest.fixture
def wallet(account_service):
    """Create a cash account with an opening balance of 200.00."""
    return account_service.create_account(
        name="Wallet", account_type="cash", opening_balance=Decimal("200.00")
    )


@pytest.fixture
def sample_categories(category_service):
    """Create a small income/expense tree and return categories by path."""
    food = category_service.create_category(name="Food", category_type="expense")
    groceries = category_service.create_category(
        name="Groceries", category_type="expense", parent_id=food.id
    )
    dining = category_service.create_category(
        name="Dining Out", category_type="expense", parent_id=food.id
    )
    transport = category_service.create_category(name="Transport", category_type="expense")
    salary = category_service.create_category(name="Salary", category_type="income")

    return {
        "Food": food,
        "Food > Groceries": groceries,
        "Food > Dining Out": dining,
        "Transport": transport,
        "Salary": salary,
    }


@pytest.fixture
def sample_loan(loan_service):
    """Create a 100000.00 simple-interest loan at 12% starting 2024-01-01."""
    return loan_service.create_loan(
        counterparty="Ravi",
        direction="GIVEN",
        principal=Decimal("100000.00"),
        start_date=date(2024, 1, 1),
        interest_rate=Decimal("12"),
        interest_method="SIMPLE",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
