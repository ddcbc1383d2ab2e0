"""
Conversion Service

Executes conversions through a category's base unit:
source -> base -> target. The service holds no knowledge of individual
units; everything unit-specific lives in the registry.
"""

import math
import numbers
import threading
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np

from ..data_structures import ConversionRequest, ConversionResult, ConversionTableRow
from ..exceptions import (
    ComputationOverflow,
    ConversionError,
    InvalidInput,
    create_error_summary
)
from .formatter import ResultFormatter
from .registry import CategoryRegistry


def coerce_value(value: Any) -> float:
    """
    Turn caller input into a finite float

    Numbers are accepted as-is and strings are parsed the way a form field
    would be. Booleans, unparsable strings and non-finite values are rejected.

    Raises:
        InvalidInput: If the value is non-numeric or non-finite
    """
    if isinstance(value, bool):
        raise InvalidInput(value, "booleans are not numeric input")

    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            raise InvalidInput(value, "out of floating-point range") from None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidInput(value, "not a number") from None
    else:
        raise InvalidInput(value, f"unsupported type {type(value).__name__}")

    if not math.isfinite(number):
        raise InvalidInput(value, "value must be finite")

    return number


class ConversionService:
    """
    Stateless unit converter backed by a category registry

    Results depend only on the request. The statistics counters are
    bookkeeping and never influence a conversion.
    """

    def __init__(self, registry: Optional[CategoryRegistry] = None,
                 formatter: Optional[ResultFormatter] = None):
        """
        Initialize conversion service

        Args:
            registry: Category registry (defaults to the built-in catalogue)
            formatter: Result formatter (defaults to the standard policy)
        """
        self.registry = registry or CategoryRegistry()
        self.formatter = formatter or ResultFormatter()

        self._lock = threading.Lock()
        self._stats = {
            'conversions': 0,
            'identity_conversions': 0,
            'array_conversions': 0,
            'errors': 0
        }

    # ---------------------------------------------------------------
    # Core operation
    # ---------------------------------------------------------------

    def convert_value(self, category_id: str, from_unit: str, to_unit: str,
                      value: Union[float, str]) -> float:
        """
        Convert a single value and return the raw number

        Raises:
            UnknownCategory: If the category is not registered
            UnknownUnit: If either unit is not part of the category
            InvalidInput: If the value is non-numeric or non-finite
            ComputationOverflow: If the result is non-finite
        """
        source = self.registry.get_unit(category_id, from_unit)
        target = self.registry.get_unit(category_id, to_unit)

        number = coerce_value(value)

        if from_unit == to_unit:
            self._record('identity_conversions')
            return number

        result = target.from_base(source.to_base(number))

        if not math.isfinite(result):
            raise ComputationOverflow(category_id, from_unit, to_unit, number)

        return result

    def convert(self, category_id: str, from_unit: str, to_unit: str,
                value: Union[float, str]) -> ConversionResult:
        """
        Convert a value and format the result

        Args:
            category_id: Category id (e.g. 'length')
            from_unit: Source unit id within the category
            to_unit: Target unit id within the category
            value: Number, or numeric string

        Returns:
            ConversionResult with the numeric value and display string

        Raises:
            ConversionError: UnknownCategory, UnknownUnit, InvalidInput
                or ComputationOverflow
        """
        return self.execute(ConversionRequest(category_id, from_unit, to_unit, value))

    def execute(self, request: ConversionRequest, label: str = None) -> ConversionResult:
        """Run a prepared ConversionRequest"""
        try:
            number = self.convert_value(request.category_id, request.from_unit,
                                        request.to_unit, request.value)
            display = self.formatter.format(number, request.category_id)
        except ConversionError:
            self._record('errors')
            raise

        self._record('conversions')
        return ConversionResult(number, display, request, label)

    def swap(self, result: ConversionResult) -> ConversionResult:
        """
        Convert a previous result back from its target unit to its source unit

        Args:
            result: Result produced by this service

        Returns:
            Result of the reversed request, using the previous result as input
        """
        if result.request is None:
            raise ValueError("Result has no originating request to swap")
        return self.execute(result.request.swapped(result.value))

    # ---------------------------------------------------------------
    # Bulk operations
    # ---------------------------------------------------------------

    def convert_array(self, category_id: str, from_unit: str, to_unit: str,
                      values) -> np.ndarray:
        """
        Convert an array of values in one call

        Args:
            category_id: Category id
            from_unit: Source unit id
            to_unit: Target unit id
            values: Array-like of numbers

        Returns:
            New float array of converted values

        Raises:
            InvalidInput: If any element is non-numeric or non-finite
            ComputationOverflow: If any converted element is non-finite
        """
        source = self.registry.get_unit(category_id, from_unit)
        target = self.registry.get_unit(category_id, to_unit)

        try:
            array = np.asarray(values, dtype=np.float64)
        except (TypeError, ValueError):
            self._record('errors')
            raise InvalidInput(values, "not an array of numbers") from None

        finite = np.isfinite(array)
        if not finite.all():
            self._record('errors')
            raise InvalidInput(array[~finite].flat[0], "array contains non-finite values")

        self._record('array_conversions')

        if from_unit == to_unit:
            return array.copy()

        with np.errstate(over='ignore'):
            result = target.from_base(source.to_base(array))

        if not np.isfinite(result).all():
            self._record('errors')
            raise ComputationOverflow(category_id, from_unit, to_unit)

        return result

    def convert_batch(self, requests: Iterable[ConversionRequest]) -> Dict[str, Any]:
        """
        Run several independent requests

        A failed request does not affect the others.

        Returns:
            Dictionary with 'results' (ConversionResult or None per request,
            in input order) and 'errors' (summary of failures)
        """
        results: List[Optional[ConversionResult]] = []
        errors: List[ConversionError] = []

        for request in requests:
            try:
                results.append(self.execute(request))
            except ConversionError as e:
                results.append(None)
                errors.append(e)

        return {
            'results': results,
            'errors': create_error_summary(errors)
        }

    # ---------------------------------------------------------------
    # Category views
    # ---------------------------------------------------------------

    def conversion_table(self, category_id: str, unit_id: str, value: Union[float, str] = 1.0,
                         limit: Optional[int] = None) -> List[ConversionTableRow]:
        """
        Express a value of one unit in every other unit of its category

        Args:
            category_id: Category id
            unit_id: Source unit id
            value: Amount of the source unit
            limit: Maximum number of rows (None for all)

        Returns:
            Rows in the category's display order, source unit excluded
        """
        category = self.registry.get_category(category_id)
        self.registry.get_unit(category_id, unit_id)
        value = coerce_value(value)

        others = [unit for unit in category.units if unit.id != unit_id]
        if limit is not None:
            others = others[:max(limit, 0)]

        rows = []
        for unit in others:
            number = self.convert_value(category_id, unit_id, unit.id, value)
            rows.append(ConversionTableRow(unit.id, unit.name, unit.symbol, number,
                                           self.formatter.format(number, category_id)))
        return rows

    def quick_conversions(self, category_id: str) -> List[ConversionResult]:
        """Run the preset conversions of a category"""
        category = self.registry.get_category(category_id)
        return [
            self.execute(ConversionRequest(category_id, preset.from_unit, preset.to_unit, preset.value),
                         label=preset.label)
            for preset in category.quick_conversions
        ]

    def list_categories(self) -> List[Dict[str, str]]:
        return self.registry.list_categories()

    def list_units(self, category_id: str) -> List[Dict[str, str]]:
        return self.registry.list_units(category_id)

    # ---------------------------------------------------------------
    # Statistics
    # ---------------------------------------------------------------

    def _record(self, counter: str):
        with self._lock:
            self._stats[counter] += 1

    def get_statistics(self) -> Dict[str, Any]:
        """Get service usage statistics"""
        with self._lock:
            stats = self._stats.copy()
        stats.update({
            'registered_categories': len(self.registry),
            'registered_units': sum(len(category.units) for category in self.registry)
        })
        return stats

    def reset_statistics(self):
        """Reset usage counters"""
        with self._lock:
            for key in self._stats:
                self._stats[key] = 0
