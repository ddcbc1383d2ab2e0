"""
Core Data Structures for the Unit Engine

Ephemeral value objects passed between the conversion service and its
callers. Nothing here is persisted or shared.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ConversionRequest:
    """A single conversion: category, source unit, target unit and input value"""
    category_id: str
    from_unit: str
    to_unit: str
    value: Any

    def swapped(self, value: Any = None) -> 'ConversionRequest':
        """
        Reverse request with source and target units exchanged

        Args:
            value: New input value (defaults to the current one)
        """
        return ConversionRequest(self.category_id, self.to_unit, self.from_unit,
                                 self.value if value is None else value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category_id,
            'from_unit': self.from_unit,
            'to_unit': self.to_unit,
            'value': self.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConversionRequest':
        """Create from dictionary (keys as produced by ``to_dict``)"""
        return cls(data['category'], data['from_unit'], data['to_unit'], data['value'])


@dataclass(frozen=True)
class ConversionResult:
    """Numeric result of a conversion plus its display string"""
    value: float
    display: str
    request: Optional[ConversionRequest] = None
    label: Optional[str] = None  # Set for preset conversions

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'display': self.display}


@dataclass(frozen=True)
class ConversionTableRow:
    """One row of a category reference table"""
    unit_id: str
    name: str
    symbol: str
    value: float
    display: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.unit_id,
            'name': self.name,
            'symbol': self.symbol,
            'value': self.value,
            'display': self.display
        }
