"""Category domain service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ledgerbook.domain.entities import Category, CategoryTreeNode, CategoryType
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    category_path_not_found,
)
from ledgerbook.domain.requests import require_text, to_enum

if TYPE_CHECKING:
    from ledgerbook.database.base import Database


class CategoryService:
    """Service for managing the two-level category tree."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_parent(self, parent_id: int, category_type: CategoryType) -> Category:
        """Check that ``parent_id`` can hold a child of ``category_type``.

        Raises:
            NotFoundError: If the parent does not exist
            ValidationError: If the parent is itself a child or has another type
        """
        parent = self.require_category(parent_id)
        if parent.parent_id is not None:
            raise ValidationError(
                f"Category '{parent.name}' is already a subcategory; "
                "categories can only be nested one level deep"
            )
        if parent.category_type != category_type:
            raise ValidationError(
                f"Parent category '{parent.name}' is {parent.category_type.value}, "
                f"not {category_type.value}"
            )
        return parent

    def create_category(
        self,
        name: str,
        category_type: CategoryType | str,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name
            category_type: income or expense
            parent_id: Optional top-level category of the same type to nest under

        Returns:
            The created category

        Raises:
            ValidationError: If the name is blank, or the parent is a
                subcategory or has a different type
            NotFoundError: If parent category doesn't exist
        """
        name = require_text(name, "Category name")
        parsed_type = to_enum(CategoryType, category_type, "category type")
        if parent_id is not None:
            self._validate_parent(parent_id, parsed_type)

        category_id = self.db.create_category(
            name=name, category_type=parsed_type, parent_id=parent_id
        )
        return self.require_category(category_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> Category:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_path(
        self, path: str, category_type: CategoryType | str | None = None
    ) -> Optional[Category]:
        """Get category by path.

        Args:
            path: Category path (e.g., "Food & Dining > Groceries")
            category_type: Optional type to disambiguate same-named categories

        Returns:
            Category entity or None if not found
        """
        parsed_type = None
        if category_type is not None:
            parsed_type = to_enum(CategoryType, category_type, "category type")
        return self.db.get_category_by_path(path, category_type=parsed_type)

    def require_category_by_path(
        self, path: str, category_type: CategoryType | str | None = None
    ) -> Category:
        """Get category by path or raise NotFoundError."""
        category = self.get_category_by_path(path, category_type=category_type)
        if category is None:
            raise NotFoundError(category_path_not_found(path))
        return category

    def list_categories(self, category_type: CategoryType | str) -> list[CategoryTreeNode]:
        """Get the category tree for one type.

        Returns:
            Top-level categories in creation order, each with its children
        """
        parsed_type = to_enum(CategoryType, category_type, "category type")
        return self.db.get_category_tree(parsed_type)

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        parent_id: Optional[int] = None,
        clear_parent: bool = False,
    ) -> Category:
        """Rename a category and/or move it under another parent.

        Args:
            category_id: Category to update
            name: Optional new name
            parent_id: Optional new top-level parent
            clear_parent: If True, move the category to the top level

        Raises:
            NotFoundError: If the category or new parent doesn't exist
            ValidationError: On self-parenting, a parent that is a subcategory
                or of another type, or giving a parent to a category that has
                children of its own
        """
        category = self.require_category(category_id)

        if parent_id is not None and clear_parent:
            raise ValidationError("Cannot set both parent_id and clear_parent")
        if parent_id is not None and parent_id == category_id:
            raise ValidationError("Category cannot be its own parent")
        if name is not None:
            name = require_text(name, "Category name")

        if parent_id is not None:
            self._validate_parent(parent_id, category.category_type)
            if self.db.list_categories(parent_id=category_id):
                raise ValidationError(
                    f"Category '{category.name}' has subcategories and cannot be nested"
                )

        self.db.update_category(
            category_id=category_id, name=name, parent_id=parent_id, clear_parent=clear_parent
        )
        return self.require_category(category_id)

    def delete_category(self, category_id: int) -> list[int]:
        """Delete a category together with its direct children.

        Entries that used any of the removed categories become uncategorized.

        Returns:
            IDs of every removed category

        Raises:
            NotFoundError: If category doesn't exist
        """
        self.require_category(category_id)
        return self.db.delete_category(category_id)

    def format_category_path(self, category_id: int) -> str:
        """Get full path for a category.

        Returns:
            "Parent > Child" for subcategories, the bare name for top-level
            categories, or "" if the category doesn't exist
        """
        cat = self.get_category(category_id)
        if cat is None:
            return ""
        if cat.parent_id is None:
            return cat.name
        parent = self.get_category(cat.parent_id)
        if parent is None:
            return cat.name
        return f"{parent.name} > {cat.name}"
