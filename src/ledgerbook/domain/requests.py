"""Typed request variants accepted by the entry ledger.

Callers hand the ledger one of these instead of a loose payload. Each variant
is validated when it is built, so a malformed request never reaches storage.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import ClassVar, Optional, TypeVar, Union

from ledgerbook.domain.entities import EntryType
from ledgerbook.domain.errors import ValidationError

E = TypeVar("E", bound=Enum)


def to_decimal(value, field_name: str) -> Decimal:
    """Convert a number-like value to a finite Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.

    Raises:
        ValidationError: If the value is missing, unparseable or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def to_positive_amount(value, field_name: str = "Amount") -> Decimal:
    """Return the magnitude of ``value``, rejecting zero."""
    amount = abs(to_decimal(value, field_name))
    if amount == 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount


def to_date(value, field_name: str = "Date") -> date:
    """Accept a date, a datetime (truncated to its calendar day) or an ISO string."""
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date (YYYY-MM-DD), got {value!r}")


def to_enum(enum_cls: type[E], value, field_name: str) -> E:
    """Parse an enum member from itself or its value (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value.lower() == value.strip().lower():
                return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"Invalid {field_name} {value!r}; expected one of: {allowed}")


def require_text(value: Optional[str], field_name: str) -> str:
    """Return stripped text, rejecting missing or blank values."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


@dataclass(frozen=True)
class IncomeRequest:
    """Request to post money coming into an account."""

    entry_type: ClassVar[EntryType] = EntryType.INCOME

    date: date
    amount: Decimal
    description: str
    account_id: int
    category_id: Optional[int] = None
    linked_loan_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ExpenseRequest:
    """Request to post money leaving an account."""

    entry_type: ClassVar[EntryType] = EntryType.EXPENSE

    date: date
    amount: Decimal
    description: str
    account_id: int
    category_id: Optional[int] = None
    linked_loan_id: Optional[int] = None
    notes: Optional[str] = None


EntryCreateRequest = Union[IncomeRequest, ExpenseRequest]


@dataclass(frozen=True)
class TransferRequest:
    """Request to move money between two owned accounts."""

    date: date
    amount: Decimal
    description: str
    from_account_id: int
    to_account_id: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class ImportCandidate:
    """A parsed statement row awaiting account/category assignment.

    The statement parser leaves ``account_id`` and ``category_id`` unset; the
    caller fills them in before handing accepted rows to the ledger.
    """

    entry_type: str
    date: date
    amount: Decimal
    description: str
    notes: Optional[str] = None
    account_id: Optional[int] = None
    category_id: Optional[int] = None


def build_entry_request(
    entry_type,
    *,
    date,
    amount,
    description: Optional[str],
    account_id: Optional[int],
    category_id: Optional[int] = None,
    linked_loan_id: Optional[int] = None,
    notes: Optional[str] = None,
) -> EntryCreateRequest:
    """Validate raw fields and build an income or expense request.

    Transfers are rejected here; they have their own request type.

    Raises:
        ValidationError: If a required field is missing or malformed, or
            ``entry_type`` is ``transfer``
    """
    if entry_type is None or entry_type == "":
        raise ValidationError("Entry type is required")
    parsed_type = to_enum(EntryType, entry_type, "entry type")
    if parsed_type == EntryType.TRANSFER:
        raise ValidationError("Use create_transfer for transfers")
    if account_id is None:
        raise ValidationError("Account is required")

    request_cls = IncomeRequest if parsed_type == EntryType.INCOME else ExpenseRequest
    return request_cls(
        date=to_date(date),
        amount=to_positive_amount(amount),
        description=require_text(description, "Description"),
        account_id=account_id,
        category_id=category_id,
        linked_loan_id=linked_loan_id,
        notes=notes,
    )


def build_transfer_request(
    *,
    date,
    amount,
    description: Optional[str],
    from_account_id: Optional[int],
    to_account_id: Optional[int],
    notes: Optional[str] = None,
) -> TransferRequest:
    """Validate raw fields and build a transfer request.

    Raises:
        ValidationError: If accounts are missing or identical, or the amount
            is not strictly positive
    """
    if from_account_id is None or to_account_id is None:
        raise ValidationError("Both source and destination accounts are required")
    if from_account_id == to_account_id:
        raise ValidationError("Transfer accounts must be different")
    transfer_amount = to_decimal(amount, "Amount")
    if transfer_amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    return TransferRequest(
        date=to_date(date),
        amount=transfer_amount,
        description=(description or "").strip(),
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        notes=notes,
    )
