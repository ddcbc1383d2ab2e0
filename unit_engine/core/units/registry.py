"""Registry of measurement categories"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional

from ..exceptions import ConfigurationError, UnknownCategory, UnknownUnit
from .definitions import DEFAULT_CATEGORIES, CategoryDefinition, UnitDefinition

logger = logging.getLogger('UnitEngine')


class CategoryRegistry:
    """
    Read-only catalogue of categories and their units

    Contents are fixed when the registry is constructed. A new category or
    unit is added by passing another CategoryDefinition here; the conversion
    service needs no change.
    """

    def __init__(self, categories: Optional[Iterable[CategoryDefinition]] = None):
        """
        Initialize registry

        Args:
            categories: Category definitions in display order
                        (defaults to the built-in catalogue)
        """
        if categories is None:
            categories = DEFAULT_CATEGORIES

        table: Dict[str, CategoryDefinition] = {}
        for category in categories:
            if category.id in table:
                raise ConfigurationError(f"Category '{category.id}' already registered",
                                         category.id)
            table[category.id] = category

        self._categories = MappingProxyType(table)

        logger.debug(f"Category registry initialized with {len(table)} categories, "
                     f"{sum(len(c.units) for c in table.values())} units")

    def get_category(self, category_id: str) -> CategoryDefinition:
        """
        Look up a category

        Raises:
            UnknownCategory: If the id is not registered
        """
        try:
            return self._categories[category_id]
        except (KeyError, TypeError):
            raise UnknownCategory(category_id) from None

    def get_unit(self, category_id: str, unit_id: str) -> UnitDefinition:
        """
        Look up a unit within a category

        A unit id that only exists in another category is still unknown here.

        Raises:
            UnknownCategory: If the category is not registered
            UnknownUnit: If the unit is not part of that category
        """
        category = self.get_category(category_id)
        try:
            unit = category.get_unit(unit_id)
        except TypeError:
            unit = None
        if unit is None:
            raise UnknownUnit(category_id, unit_id)
        return unit

    def list_categories(self) -> List[Dict[str, str]]:
        """Category summaries ``{id, name, icon}`` in registration order"""
        return [category.to_dict() for category in self._categories.values()]

    def list_units(self, category_id: str) -> List[Dict[str, str]]:
        """Unit summaries ``{id, name, symbol}`` for one category"""
        return [unit.to_dict() for unit in self.get_category(category_id).units]

    def category_ids(self) -> List[str]:
        return list(self._categories)

    def __contains__(self, category_id) -> bool:
        return category_id in self._categories

    def __iter__(self) -> Iterator[CategoryDefinition]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)
