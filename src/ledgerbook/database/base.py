"""Abstract database interface.

Every method that writes more than one row (an entry plus its balance
adjustment, both legs of a transfer, a category with its children, a loan with
its repayments) is a single method here, so implementations can commit it as
one unit.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Category,
    CategoryTreeNode,
    CategoryType,
    Entry,
    EntryType,
    EntryView,
    InterestMethod,
    Loan,
    LoanDirection,
    LoanRepayment,
    RepaymentType,
)


class Database(ABC):
    """Abstract database interface for ledgerbook."""

    def __enter__(self) -> "Database":
        self.connect()
        self.initialize_schema()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database and release its resources."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        account_type: AccountType,
        opening_balance: Decimal,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account with ``current_balance = opening_balance``. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str) -> Optional[Account]:
        """Get account by exact name."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update account details. Never touches balances."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account that no entry references."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, category_type: CategoryType, parent_id: Optional[int] = None
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_path(
        self, path: str, category_type: Optional[CategoryType] = None
    ) -> Optional[Category]:
        """Get category by path (e.g., 'Food & Dining > Groceries')."""
        pass

    @abstractmethod
    def list_categories(
        self, parent_id: Optional[int] = None, category_type: Optional[CategoryType] = None
    ) -> list[Category]:
        """List top-level categories, or the children of ``parent_id``."""
        pass

    @abstractmethod
    def get_category_tree(self, category_type: CategoryType) -> list[CategoryTreeNode]:
        """Get top-level categories of a type with their children, oldest first."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        parent_id: Optional[int] = None,
        clear_parent: bool = False,
    ) -> None:
        """Update category name and/or parent."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> list[int]:
        """Delete a category and its direct children in one unit.

        Entries pointing at any removed category are left uncategorized.
        Returns the removed category IDs.
        """
        pass

    # Entry operations
    @abstractmethod
    def create_entry(
        self,
        entry_type: EntryType,
        date: date,
        amount: Decimal,
        description: str,
        account_id: int,
        category_id: Optional[int] = None,
        linked_loan_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Persist an income/expense entry and adjust its account balance together.

        Returns entry ID.
        """
        pass

    @abstractmethod
    def create_transfer(
        self,
        date: date,
        amount: Decimal,
        description: str,
        from_account_id: int,
        to_account_id: int,
        notes: Optional[str] = None,
    ) -> str:
        """Persist both transfer legs and both balance adjustments together.

        Returns the shared transfer group ID.
        """
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[Entry]:
        """Get entry by ID."""
        pass

    @abstractmethod
    def get_transfer_legs(self, transfer_group_id: str) -> list[Entry]:
        """Get the entries sharing a transfer group ID, debit leg first."""
        pass

    @abstractmethod
    def update_entry(
        self,
        entry_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        notes: Optional[str] = None,
        clear_category: bool = False,
    ) -> None:
        """Update an income/expense entry, re-deriving the balance on amount change."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> list[int]:
        """Delete an entry (or its whole transfer group) and reverse balance effects.

        Returns the removed entry IDs.
        """
        pass

    @abstractmethod
    def list_entries(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        entry_type: Optional[EntryType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        uncategorized_only: bool = False,
        search_text: Optional[str] = None,
    ) -> list[EntryView]:
        """List entries joined with account and category names, newest first.

        Args:
            account_id: Only entries owned by this account
            category_id: Only entries in this category or its direct children
            entry_type: Only entries of this type
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            uncategorized_only: Only income/expense entries without a category
            search_text: Case-insensitive match on description or notes
        """
        pass

    # Loan operations
    @abstractmethod
    def create_loan(
        self,
        counterparty: str,
        direction: LoanDirection,
        principal: Decimal,
        interest_rate: Decimal,
        interest_method: InterestMethod,
        start_date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Create a loan. Returns loan ID."""
        pass

    @abstractmethod
    def get_loan(self, loan_id: int) -> Optional[Loan]:
        """Get loan by ID, including its repayment log."""
        pass

    @abstractmethod
    def list_loans(self) -> list[Loan]:
        """List loans, newest first, including repayment logs."""
        pass

    @abstractmethod
    def update_loan(
        self,
        loan_id: int,
        counterparty: Optional[str] = None,
        direction: Optional[LoanDirection] = None,
        principal: Optional[Decimal] = None,
        interest_rate: Optional[Decimal] = None,
        interest_method: Optional[InterestMethod] = None,
        start_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update loan terms."""
        pass

    @abstractmethod
    def delete_loan(self, loan_id: int) -> None:
        """Delete a loan with its repayments and unlink entries tagged with it."""
        pass

    @abstractmethod
    def add_repayment(
        self,
        loan_id: int,
        amount: Decimal,
        repayment_type: RepaymentType,
        date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Append a repayment to a loan's log. Returns repayment ID."""
        pass

    @abstractmethod
    def get_repayment(self, repayment_id: int) -> Optional[LoanRepayment]:
        """Get repayment by ID."""
        pass

    @abstractmethod
    def list_repayments(self, loan_id: int) -> list[LoanRepayment]:
        """List a loan's repayments, oldest first."""
        pass
