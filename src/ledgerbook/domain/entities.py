"""Domain model entities for ledgerbook.

These are pure data classes representing business concepts, independent of
database schema. Money is always carried as ``Decimal``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kinds of account a ledger can hold."""

    BANK = "bank"
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    INVESTMENT = "investment"
    LOAN_RECEIVABLE = "loan_receivable"
    LOAN_PAYABLE = "loan_payable"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class EntryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class TransferLeg(str, Enum):
    """Which side of a transfer an entry row represents."""

    DEBIT = "debit"
    CREDIT = "credit"


class LoanDirection(str, Enum):
    GIVEN = "GIVEN"
    TAKEN = "TAKEN"


class InterestMethod(str, Enum):
    SIMPLE = "SIMPLE"
    COMPOUND = "COMPOUND"


class RepaymentType(str, Enum):
    PRINCIPAL = "PRINCIPAL"
    INTEREST = "INTEREST"


def signed_effect(
    entry_type: EntryType, amount: Decimal, transfer_leg: Optional[TransferLeg] = None
) -> Decimal:
    """Return the signed contribution of an entry to its account's balance.

    Amounts are stored as magnitudes; the sign comes from the entry type and,
    for transfers, from the leg.

    Raises:
        ValueError: If a transfer entry has no leg
    """
    magnitude = abs(amount)
    if entry_type == EntryType.INCOME:
        return magnitude
    if entry_type == EntryType.EXPENSE:
        return -magnitude
    if transfer_leg == TransferLeg.DEBIT:
        return -magnitude
    if transfer_leg == TransferLeg.CREDIT:
        return magnitude
    raise ValueError("Transfer entries need a leg to determine their signed effect")


@dataclass(frozen=True)
class Account:
    """Account domain entity with its running balance."""

    id: int
    name: str
    account_type: AccountType
    description: Optional[str]
    opening_balance: Decimal
    current_balance: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity; at most one level of nesting."""

    id: int
    name: str
    category_type: CategoryType
    parent_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class CategoryTreeNode:
    """A top-level category with its direct children."""

    category: Category
    children: tuple[Category, ...] = ()


@dataclass(frozen=True)
class Entry:
    """A posted income, expense, or one leg of a transfer."""

    id: int
    entry_type: EntryType
    date: date
    amount: Decimal
    description: str
    notes: Optional[str]
    account_id: int
    category_id: Optional[int]
    linked_loan_id: Optional[int]
    transfer_group_id: Optional[str]
    counter_account_id: Optional[int]
    transfer_leg: Optional[TransferLeg]
    created_at: datetime
    updated_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        return signed_effect(self.entry_type, self.amount, self.transfer_leg)

    @property
    def is_transfer(self) -> bool:
        return self.entry_type == EntryType.TRANSFER


@dataclass(frozen=True)
class EntryView:
    """Entry joined with the names needed to display it."""

    entry: Entry
    account_name: str
    category_name: Optional[str]
    counter_account_name: Optional[str]


@dataclass(frozen=True)
class LoanRepayment:
    """One append-only row of a loan's repayment log."""

    id: int
    loan_id: int
    amount: Decimal
    repayment_type: RepaymentType
    date: date
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Loan:
    """Peer loan with its repayment log.

    Repaid totals are derived from ``repayments`` on every access; they are
    never stored separately.
    """

    id: int
    counterparty: str
    direction: LoanDirection
    principal: Decimal
    interest_rate: Decimal
    interest_method: InterestMethod
    start_date: date
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    repayments: tuple[LoanRepayment, ...] = field(default=())

    @property
    def total_repaid(self) -> Decimal:
        return sum((r.amount for r in self.repayments), Decimal("0"))

    @property
    def principal_repaid(self) -> Decimal:
        return sum(
            (r.amount for r in self.repayments if r.repayment_type == RepaymentType.PRINCIPAL),
            Decimal("0"),
        )

    @property
    def interest_paid(self) -> Decimal:
        return sum(
            (r.amount for r in self.repayments if r.repayment_type == RepaymentType.INTEREST),
            Decimal("0"),
        )


@dataclass(frozen=True)
class LoanAccrual:
    """Result of evaluating a loan on a given date."""

    loan_id: int
    evaluation_date: date
    days_elapsed: int
    outstanding_principal: Decimal
    accrued_interest: Decimal
    interest_paid: Decimal
    interest_due: Decimal
    total_due: Decimal


@dataclass(frozen=True)
class BulkPostFailure:
    """A candidate that could not be posted."""

    index: int
    message: str


@dataclass(frozen=True)
class BulkPostResult:
    """Outcome of posting a batch of import candidates."""

    total: int
    posted_entry_ids: tuple[int, ...]
    failures: tuple[BulkPostFailure, ...]

    @property
    def posted(self) -> int:
        return len(self.posted_entry_ids)

    @property
    def failed(self) -> int:
        return len(self.failures)
