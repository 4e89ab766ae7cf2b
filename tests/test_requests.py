"""Tests for entry request validation."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from ledgerbook.domain.entities import EntryType, LoanDirection
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.requests import (
    ExpenseRequest,
    IncomeRequest,
    build_entry_request,
    build_transfer_request,
    to_date,
    to_decimal,
    to_enum,
    to_positive_amount,
)


class TestConverters:
    """Tests for the field converters."""

    def test_to_decimal_from_float_uses_string_form(self):
        assert to_decimal(0.1, "Amount") == Decimal("0.1")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError, match="must be a number"):
            to_decimal("abc", "Amount")

    def test_to_decimal_rejects_non_finite(self):
        with pytest.raises(ValidationError, match="finite"):
            to_decimal("NaN", "Amount")

    def test_to_decimal_rejects_missing_and_bool(self):
        with pytest.raises(ValidationError):
            to_decimal(None, "Amount")
        with pytest.raises(ValidationError):
            to_decimal(True, "Amount")

    def test_to_positive_amount_takes_magnitude(self):
        assert to_positive_amount("-42.50") == Decimal("42.50")

    def test_to_positive_amount_rejects_zero(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            to_positive_amount("0")

    def test_to_date_accepts_datetime_and_iso_string(self):
        assert to_date(datetime(2024, 3, 5, 18, 30)) == date(2024, 3, 5)
        assert to_date("2024-03-05T10:00:00Z") == date(2024, 3, 5)

    def test_to_date_rejects_invalid(self):
        with pytest.raises(ValidationError):
            to_date("05/03/2024")
        with pytest.raises(ValidationError):
            to_date(None)

    def test_to_enum_is_case_insensitive(self):
        assert to_enum(LoanDirection, "given", "direction") is LoanDirection.GIVEN
        with pytest.raises(ValidationError, match="expected one of"):
            to_enum(LoanDirection, "LENT", "direction")


class TestBuildEntryRequest:
    """Tests for income/expense request variants."""

    def test_builds_expense_request(self):
        request = build_entry_request(
            "expense",
            date="2024-01-15",
            amount="-45.00",
            description=" Lunch ",
            account_id=1,
        )
        assert isinstance(request, ExpenseRequest)
        assert request.entry_type == EntryType.EXPENSE
        assert request.amount == Decimal("45.00")
        assert request.description == "Lunch"

    def test_builds_income_request(self):
        request = build_entry_request(
            EntryType.INCOME, date=date(2024, 1, 31), amount=85000, description="Salary", account_id=1
        )
        assert isinstance(request, IncomeRequest)

    def test_rejects_transfer(self):
        with pytest.raises(ValidationError, match="create_transfer"):
            build_entry_request(
                "transfer", date="2024-01-15", amount="10", description="x", account_id=1
            )

    def test_requires_description_and_account(self):
        with pytest.raises(ValidationError, match="Description"):
            build_entry_request("expense", date="2024-01-15", amount="10", description="  ", account_id=1)
        with pytest.raises(ValidationError, match="Account"):
            build_entry_request("expense", date="2024-01-15", amount="10", description="x", account_id=None)

    def test_requires_entry_type(self):
        with pytest.raises(ValidationError, match="Entry type"):
            build_entry_request(None, date="2024-01-15", amount="10", description="x", account_id=1)


class TestBuildTransferRequest:
    """Tests for transfer requests."""

    def test_rejects_same_account(self):
        with pytest.raises(ValidationError, match="must be different"):
            build_transfer_request(
                date="2024-01-15", amount="10", description="", from_account_id=1, to_account_id=1
            )

    def test_rejects_non_positive_amount(self):
        for amount in ("0", "-5"):
            with pytest.raises(ValidationError, match="greater than zero"):
                build_transfer_request(
                    date="2024-01-15",
                    amount=amount,
                    description="",
                    from_account_id=1,
                    to_account_id=2,
                )

    def test_description_may_be_empty(self):
        request = build_transfer_request(
            date="2024-01-15", amount="10", description=None, from_account_id=1, to_account_id=2
        )
        assert request.description == ""
        assert request.amount == Decimal("10")
