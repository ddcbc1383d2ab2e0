"""
Result Formatting

Renders conversion results so they stay legible from 0.0000003 to
3,000,000,000: fixed-point inside a magnitude window, scientific notation
outside it.
"""

import math
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ConfigurationError, InvalidInput


@dataclass(frozen=True)
class FormatPolicy:
    """
    Formatting thresholds and precision

    Values with ``abs(value) < scientific_lower`` or
    ``abs(value) >= scientific_upper`` use scientific notation; everything
    else is fixed-point. Zero is always "0".
    """
    scientific_lower: float = 1e-4
    scientific_upper: float = 1e6
    precision: int = 6  # Fraction digits in scientific notation
    max_fraction_digits: int = 6  # Fixed-point, trailing zeros trimmed
    group_digits: bool = True
    group_separator: str = ","

    def validate(self, section: str = 'formatting') -> bool:
        """
        Validate policy values

        Raises:
            ConfigurationError: If a value is out of range
        """
        for name in ('scientific_lower', 'scientific_upper'):
            threshold = getattr(self, name)
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {threshold!r}", section, name)

        if not (math.isfinite(self.scientific_lower) and self.scientific_lower >= 0):
            raise ConfigurationError(f"scientific_lower must be a non-negative number, "
                                     f"got {self.scientific_lower}", section, 'scientific_lower')

        if not self.scientific_upper > self.scientific_lower:
            raise ConfigurationError(f"scientific_upper ({self.scientific_upper}) must be greater "
                                     f"than scientific_lower ({self.scientific_lower})",
                                     section, 'scientific_upper')

        for name in ('precision', 'max_fraction_digits'):
            digits = getattr(self, name)
            if isinstance(digits, bool) or not isinstance(digits, int) or not 0 <= digits <= 20:
                raise ConfigurationError(f"{name} must be an integer between 0 and 20, got {digits!r}",
                                         section, name)

        if self.group_digits and (self.group_separator in ('.', '') or
                                  any(ch.isdigit() for ch in self.group_separator)):
            raise ConfigurationError(f"Invalid group separator: {self.group_separator!r}",
                                     section, 'group_separator')

        return True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormatPolicy':
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown formatting options: {', '.join(sorted(unknown))}",
                                     'formatting')
        return cls(**data)


class ResultFormatter:
    """Formats numeric results according to a deployment-wide policy"""

    def __init__(self, policy: Optional[FormatPolicy] = None,
                 category_policies: Optional[Mapping[str, FormatPolicy]] = None):
        """
        Initialize formatter

        Args:
            policy: Default policy for every category
            category_policies: Optional per-category overrides
        """
        self.policy = policy or FormatPolicy()
        self.policy.validate()

        overrides = dict(category_policies or {})
        for category_id, override in overrides.items():
            override.validate(f"category_formatting.{category_id}")
        self.category_policies = MappingProxyType(overrides)

    def policy_for(self, category_id: Optional[str] = None) -> FormatPolicy:
        return self.category_policies.get(category_id, self.policy)

    def format(self, value: float, category_id: Optional[str] = None) -> str:
        """
        Render a numeric value

        Args:
            value: Finite number to render
            category_id: Category whose override policy applies, if any

        Returns:
            Display string

        Raises:
            InvalidInput: If value is NaN or infinite
        """
        value = float(value)
        if not math.isfinite(value):
            raise InvalidInput(value, "cannot format a non-finite value")

        if value == 0:
            return "0"

        policy = self.policy_for(category_id)
        magnitude = abs(value)

        if magnitude < policy.scientific_lower or magnitude >= policy.scientific_upper:
            return f"{value:.{policy.precision}e}"

        return self._format_fixed(value, policy)

    @staticmethod
    def _format_fixed(value: float, policy: FormatPolicy) -> str:
        digits = policy.max_fraction_digits
        if policy.group_digits:
            text = f"{value:,.{digits}f}"
        else:
            text = f"{value:.{digits}f}"

        if '.' in text:
            text = text.rstrip('0').rstrip('.')

        # Tiny values can round away entirely under a custom lower threshold
        if text in ('-0', '0'):
            return "0"

        if policy.group_digits and policy.group_separator != ',':
            text = text.replace(',', policy.group_separator)

        return text
