"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``retryable`` tells callers
    whether repeating the same call with the same input can succeed.
    """

    retryable = False


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account, category, entry or loan does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or dependent rows."""


class InvalidOperationError(DomainError):
    """Operation is not allowed for the target in its current state."""


class TransactionError(DomainError):
    """The storage transaction was aborted and rolled back."""

    retryable = True

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_path_not_found(path: str) -> str:
    """Return message for missing category by path."""
    return f"Category '{path}' not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing entry."""
    return f"Entry {entry_id} not found"


def loan_not_found(loan_id: int) -> str:
    """Return message for missing loan."""
    return f"Loan {loan_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name that is already taken."""
    return f"Account with name '{name}' already exists"


def transfer_not_editable(entry_id: int) -> str:
    """Return message when an edit targets a transfer leg."""
    return (
        f"Entry {entry_id} is part of a transfer; transfers cannot be edited, "
        "only deleted"
    )


def account_delete_blocked(account_id: int, entry_count: int) -> str:
    """Return message when account still has entries referencing it."""
    return (
        f"Cannot delete account {account_id}: it has "
        f"{entry_count} entr{'ies' if entry_count != 1 else 'y'}. "
        "Please delete them first."
    )
