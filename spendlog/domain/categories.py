"""Category registry: which category names each transaction type allows.

Default categories are fixed; custom ones are added and removed by the user.
"""

from collections.abc import Mapping
from typing import Any

from spendlog.domain.errors import DuplicateError, InvalidInput, NotFound, ProtectedCategoryError
from spendlog.domain.models import CategoryName, TransactionType

DEFAULT_CATEGORIES: dict[str, tuple[CategoryName, ...]] = {
    TransactionType.EXPENSE: tuple(
        CategoryName(name)
        for name in ("Food", "Travel", "Books", "Stationery", "Entertainment", "General", "Other")
    ),
    TransactionType.INCOME: tuple(
        CategoryName(name) for name in ("Pocket Money", "Part-Time Job", "Gift", "Refund", "Other Income")
    ),
}


def _check_type(txn_type: str) -> None:
    if txn_type not in TransactionType.ALL:
        raise InvalidInput(["type"], f"Unknown transaction type: {txn_type!r}")


class CategoryRegistry:
    """Ordered, duplicate-free category names per transaction type."""

    def __init__(self, custom: Mapping[str, list[str]] | None = None) -> None:
        self._custom: dict[str, list[CategoryName]] = {t: [] for t in TransactionType.ALL}
        for txn_type, names in (custom or {}).items():
            for name in names:
                self.add_custom(txn_type, name)

    @classmethod
    def from_mapping(cls, mapping: Any) -> "CategoryRegistry":
        """Rebuild a registry from a persisted type -> names mapping.

        The mapping may hold the full lists (defaults included) or only the
        custom names. Defaults are always present afterwards; unknown types,
        non-string names, blanks, and repeats are skipped.

        Raises:
            ValueError: If the mapping is not an object of lists.
        """
        if not isinstance(mapping, Mapping):
            raise ValueError("categories must be an object")

        registry = cls()
        for txn_type, names in mapping.items():
            if txn_type not in TransactionType.ALL:
                continue
            if not isinstance(names, list):
                raise ValueError(f"categories for '{txn_type}' must be a list")
            for name in names:
                if not isinstance(name, str) or not name.strip():
                    continue
                if name.strip() in registry.categories_for(txn_type):
                    continue
                registry.add_custom(txn_type, name)
        return registry

    def categories_for(self, txn_type: str) -> list[CategoryName]:
        """Default names followed by custom names, in insertion order."""
        _check_type(txn_type)
        return list(DEFAULT_CATEGORIES[txn_type]) + list(self._custom[txn_type])

    def all_categories(self) -> list[CategoryName]:
        """Every name across both types, de-duplicated and sorted."""
        names: set[CategoryName] = set()
        for txn_type in TransactionType.ALL:
            names.update(self.categories_for(txn_type))
        return sorted(names)

    def is_default(self, txn_type: str, name: str) -> bool:
        _check_type(txn_type)
        return name in DEFAULT_CATEGORIES[txn_type]

    def contains(self, txn_type: str, name: str) -> bool:
        return name in self.categories_for(txn_type)

    def add_custom(self, txn_type: str, name: str) -> CategoryName:
        """Add a custom category.

        Returns:
            The stored (trimmed) name.

        Raises:
            InvalidInput: If the type is unknown or the name is blank.
            DuplicateError: If the name already exists for this type.
        """
        _check_type(txn_type)
        cleaned = name.strip() if isinstance(name, str) else ""
        if not cleaned:
            raise InvalidInput(["name"], "Category name cannot be blank")
        if cleaned in self.categories_for(txn_type):
            raise DuplicateError(f"Category '{cleaned}' already exists for {txn_type}")
        category = CategoryName(cleaned)
        self._custom[txn_type].append(category)
        return category

    def remove_custom(self, txn_type: str, name: str) -> None:
        """Remove a custom category.

        Raises:
            ProtectedCategoryError: If the name is a default for this type.
            NotFound: If the name is not present for this type.
        """
        if self.is_default(txn_type, name):
            raise ProtectedCategoryError(f"'{name}' is a default {txn_type} category and cannot be removed")
        if name not in self._custom[txn_type]:
            raise NotFound(f"Category '{name}' not found for {txn_type}")
        self._custom[txn_type].remove(CategoryName(name))

    def custom(self) -> dict[str, list[CategoryName]]:
        return {t: list(names) for t, names in self._custom.items()}

    def to_mapping(self) -> dict[str, list[CategoryName]]:
        """Full type -> names mapping, the shape written to storage and backups."""
        return {t: self.categories_for(t) for t in TransactionType.ALL}
