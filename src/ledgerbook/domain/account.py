"""Account domain service."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ledgerbook.domain.entities import Account as AccountEntity, AccountType
from ledgerbook.domain.errors import NotFoundError, account_not_found
from ledgerbook.domain.requests import require_text, to_decimal, to_enum

if TYPE_CHECKING:
    from ledgerbook.database.base import Database


class AccountService:
    """Service for managing accounts.

    Balances are never written here; they move only when the entry ledger
    posts or removes entries.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: AccountType | str,
        opening_balance: Decimal | int | str = Decimal("0"),
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Create a new account.

        Args:
            name: Account name
            account_type: One of the AccountType values
            opening_balance: Starting balance; also the initial current balance
            description: Optional description

        Returns:
            The created account

        Raises:
            ValidationError: If name is empty, the type is unknown or the
                opening balance is not a finite number
            ConflictError: If account name already exists
        """
        name = require_text(name, "Account name")
        parsed_type = to_enum(AccountType, account_type, "account type")
        balance = to_decimal(opening_balance, "Opening balance")

        account_id = self.db.create_account(
            name=name,
            account_type=parsed_type,
            opening_balance=balance,
            description=description or None,
        )
        return self.require_account(account_id)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def get_account_by_name(self, name: str) -> Optional[AccountEntity]:
        return self.db.get_account_by_name(name)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: AccountType | str | None = None,
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Update account name, type or description. Balances are untouched.

        An empty description clears it.

        Raises:
            NotFoundError: If account not found
            ValidationError: If the new name is blank or the type is unknown
            ConflictError: If the new name already exists
        """
        self.require_account(account_id)

        if name is not None:
            name = require_text(name, "Account name")
        parsed_type = None
        if account_type is not None:
            parsed_type = to_enum(AccountType, account_type, "account type")

        self.db.update_account(
            account_id=account_id,
            name=name,
            account_type=parsed_type,
            description=description,
        )
        return self.require_account(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        The account can only be deleted if no entry references it, either as
        its own account or as the other side of a transfer.

        Raises:
            NotFoundError: If account not found
            ConflictError: If entries still reference the account
        """
        self.require_account(account_id)
        self.db.delete_account(account_id)

    def reconcile_account(self, account_id: int) -> tuple[Decimal, Decimal]:
        """Recompute an account's balance from its entries.

        Returns:
            Tuple of (stored current balance, opening balance plus the signed
            effect of every entry the account owns). The two are equal
            whenever the ledger is consistent.

        Raises:
            NotFoundError: If account not found
        """
        account = self.require_account(account_id)
        views = self.db.list_entries(account_id=account_id)
        derived = account.opening_balance + sum(
            (view.entry.signed_amount for view in views), Decimal("0")
        )
        return account.current_balance, derived

