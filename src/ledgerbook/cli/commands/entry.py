"""Entry commands: post, transfer, edit, delete and list."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.date_filters import resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import EntryType, EntryView, TransferLeg
from ledgerbook.domain.entry import EntryLedgerService
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import PERIODS, parse_date


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def _format_entry_row(view: EntryView) -> str:
    entry = view.entry
    if entry.is_transfer:
        arrow = "->" if entry.transfer_leg == TransferLeg.DEBIT else "<-"
        target = f"{arrow} {view.counter_account_name or '?'}"
    else:
        target = view.category_name or "Uncategorized"
    return (
        f"{entry.id:5d} | {entry.date} | {view.account_name:15s} | "
        f"{entry.signed_amount:>12,.2f} | {entry.entry_type.value:8s} | "
        f"{target:25s} | {entry.description}"
    )


@click.group()
def entry_group():
    """Post and manage ledger entries."""
    pass


@entry_group.command("add")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    required=True,
    help="Entry type",
)
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    "date_str",
    default="today",
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Entry amount (e.g., 1250.00)")
@click.option("--description", required=True, help="Entry description")
@click.option("--category", help="Category path (e.g., 'Food > Groceries')")
@click.option("--loan", "loan_id", type=int, help="ID of a loan this entry relates to")
@click.option("--notes", help="Notes")
@click.pass_context
def add_entry(
    ctx,
    entry_type: str,
    account: str,
    date_str: str,
    amount: str,
    description: str,
    category: str | None,
    loan_id: int | None,
    notes: str | None,
):
    """Post an income or expense entry.

    Examples:
        ledgerbook entry add --type expense --account Wallet --amount 450 --description "Groceries"
        ledgerbook entry add --type income --account 1 --date 2024-01-31 --amount 85000 \\
            --description "January salary" --category Salary
    """
    db = ctx.obj["db"]
    ledger = EntryLedgerService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    entry_date = _parse_date_or_exit(ctx, date_str)
    entry_amount = _parse_amount_or_exit(ctx, amount)

    try:
        category_id = None
        if category:
            category_id = category_service.require_category_by_path(
                category, category_type=entry_type
            ).id
        entry = ledger.create_income_or_expense(
            entry_type=entry_type,
            date=entry_date,
            amount=entry_amount,
            description=description,
            account_id=account_id,
            category_id=category_id,
            linked_loan_id=loan_id,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    balance = account_service.require_account(account_id).current_balance
    click.echo(f"Posted {entry.entry_type.value} entry {entry.id}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Amount: {entry.signed_amount:,.2f}")
    if category:
        click.echo(f"  Category: {category}")
    click.echo(f"  Balance: {balance:,.2f}")


@entry_group.command("transfer")
@click.option("--from", "from_account", required=True, help="Source account name or ID")
@click.option("--to", "to_account", required=True, help="Destination account name or ID")
@click.option(
    "--date",
    "date_str",
    default="today",
    help="Transfer date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Amount to move")
@click.option("--description", default="", help="Transfer description")
@click.option("--notes", help="Notes")
@click.pass_context
def transfer(
    ctx,
    from_account: str,
    to_account: str,
    date_str: str,
    amount: str,
    description: str,
    notes: str | None,
):
    """Move money between two of your accounts.

    Examples:
        ledgerbook entry transfer --from "HDFC Savings" --to Wallet --amount 2000
    """
    db = ctx.obj["db"]
    ledger = EntryLedgerService(db)
    account_service = AccountService(db)

    from_id = resolve_account_or_exit(ctx, account_service, from_account)
    to_id = resolve_account_or_exit(ctx, account_service, to_account)
    transfer_date = _parse_date_or_exit(ctx, date_str)
    transfer_amount = _parse_amount_or_exit(ctx, amount)

    try:
        group_id = ledger.create_transfer(
            date=transfer_date,
            amount=transfer_amount,
            description=description,
            from_account_id=from_id,
            to_account_id=to_id,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    source = account_service.require_account(from_id)
    destination = account_service.require_account(to_id)
    click.echo(f"Transferred {transfer_amount:,.2f} (group {group_id})")
    click.echo(f"  {source.name}: {source.current_balance:,.2f}")
    click.echo(f"  {destination.name}: {destination.current_balance:,.2f}")


@entry_group.command("edit")
@click.argument("entry_id", type=int)
@click.option("--date", "date_str", help="New date")
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--category", help="New category path (empty string to clear)")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: int,
    date_str: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    notes: str | None,
):
    """Edit an income or expense entry.

    Transfers cannot be edited; delete and re-create them instead.
    """
    db = ctx.obj["db"]
    ledger = EntryLedgerService(db)
    category_service = CategoryService(db)

    new_date = _parse_date_or_exit(ctx, date_str) if date_str else None
    new_amount = _parse_amount_or_exit(ctx, amount) if amount else None

    try:
        entry = ledger.require_entry(entry_id)
        category_id = None
        clear_category = category == ""
        if category and not entry.is_transfer:
            category_id = category_service.require_category_by_path(
                category, category_type=entry.entry_type.value
            ).id
        updated = ledger.update_entry(
            entry_id=entry_id,
            date=new_date,
            description=description,
            amount=new_amount,
            category_id=category_id,
            notes=notes,
            clear_category=clear_category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated entry {updated.id}")


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, yes: bool):
    """Delete an entry and reverse its effect on the balance.

    Deleting either leg of a transfer deletes both legs.
    """
    ledger = EntryLedgerService(ctx.obj["db"])

    try:
        entry = ledger.require_entry(entry_id)
        prompt = (
            f"Delete transfer {entry.transfer_group_id} (both legs)?"
            if entry.is_transfer
            else f"Delete entry {entry_id} ({entry.description})?"
        )
        if not yes and not click.confirm(prompt):
            click.echo("Deletion cancelled.")
            return
        removed = ledger.delete_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entries: {', '.join(str(i) for i in removed)}")


@entry_group.command("list")
@click.option("--account", help="Filter by account name or ID")
@click.option("--category", help="Filter by category path (includes subcategories)")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice([t.value for t in EntryType], case_sensitive=False),
    help="Filter by entry type",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@click.option(
    "--period",
    type=click.Choice(PERIODS, case_sensitive=False),
    help="Named period instead of explicit dates",
)
@click.option("--uncategorized", is_flag=True, help="Show only uncategorized entries")
@click.option("--search", help="Text to search for in description and notes")
@click.pass_context
def list_entries(
    ctx,
    account: str | None,
    category: str | None,
    entry_type: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    uncategorized: bool,
    search: str | None,
):
    """List entries, newest first."""
    db = ctx.obj["db"]
    ledger = EntryLedgerService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        category_id = None
        if category:
            category_id = CategoryService(db).require_category_by_path(category).id
        views = ledger.list_entries(
            account_id=account_id,
            category_id=category_id,
            entry_type=entry_type,
            start_date=start,
            end_date=end,
            uncategorized_only=uncategorized,
            search_text=search,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not views:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(views)} entr{'ies' if len(views) != 1 else 'y'}:")
    click.echo("-" * 110)
    for view in views:
        click.echo(_format_entry_row(view))


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
