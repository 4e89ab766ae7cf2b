"""Category management commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import CategoryTreeNode, CategoryType
from ledgerbook.domain.errors import DomainError

CATEGORY_TYPES = [t.value for t in CategoryType]


def print_category_tree(nodes: list[CategoryTreeNode]) -> None:
    """Print top-level categories with their children indented."""
    for node in nodes:
        click.echo(f"{node.category.name} (ID: {node.category.id})")
        for child in node.children:
            click.echo(f"  {child.name} (ID: {child.id})")


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    help="Only list one type (default: both)",
)
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories in tree format."""
    service = CategoryService(ctx.obj["db"])

    types = [category_type] if category_type else CATEGORY_TYPES
    found_any = False
    for type_name in types:
        tree = service.list_categories(type_name)
        if not tree:
            continue
        found_any = True
        click.echo(f"\n{type_name.capitalize()} categories:")
        print_category_tree(tree)

    if not found_any:
        click.echo("No categories found.")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.option("--parent", help="Parent category name (must be a top-level category)")
@click.pass_context
def create_category(ctx, name: str, category_type: str, parent: str | None):
    """Create a new category.

    Examples:
        ledgerbook category create "Food"
        ledgerbook category create "Groceries" --parent "Food"
        ledgerbook category create "Salary" --type income
    """
    service = CategoryService(ctx.obj["db"])

    try:
        parent_id = None
        if parent:
            parent_id = service.require_category_by_path(parent, category_type=category_type).id
        category = service.create_category(
            name=name, category_type=category_type, parent_id=parent_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    parent_str = f" under '{parent}'" if parent else ""
    click.echo(f"Created category '{category.name}'{parent_str} (ID: {category.id})")


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New category name")
@click.option("--parent", "parent_id", type=int, help="ID of the new parent category")
@click.option("--top-level", is_flag=True, help="Move the category to the top level")
@click.pass_context
def update_category(ctx, category_id: int, name: str | None, parent_id: int | None, top_level: bool):
    """Rename a category or move it under another parent."""
    service = CategoryService(ctx.obj["db"])

    try:
        category = service.update_category(
            category_id=category_id, name=name, parent_id=parent_id, clear_parent=top_level
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category {category.id}: {service.format_category_path(category.id)}")


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_category(ctx, category_id: int, yes: bool):
    """Delete a category and its subcategories.

    Entries in the deleted categories become uncategorized.
    """
    service = CategoryService(ctx.obj["db"])

    try:
        category = service.require_category(category_id)
        if not yes and not click.confirm(
            f"Delete category '{category.name}' and its subcategories?"
        ):
            click.echo("Deletion cancelled.")
            return
        removed = service.delete_category(category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {len(removed)} categor{'ies' if len(removed) != 1 else 'y'}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
