"""
Unit Definitions for the Unit Engine

Declarative catalogue of measurement categories. Every unit is described by
an exact scale and an offset relative to its category's base unit, so the
catalogue is pure data and the converter never special-cases a unit.
"""

import math
from dataclasses import dataclass, field
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

import numpy as np

from ..exceptions import ConfigurationError

ScaleLike = Union[int, float, str, Fraction]


def _as_fraction(scale: ScaleLike) -> Fraction:
    """Exact fraction for a scale given as int, decimal string, float or Fraction"""
    if isinstance(scale, Fraction):
        return scale
    if isinstance(scale, float):
        if not math.isfinite(scale):
            raise ConfigurationError(f"Scale must be finite, got {scale}", parameter='scale')
        # repr gives the shortest decimal that round-trips, e.g. 0.3048 -> 381/1250
        return Fraction(repr(scale))
    return Fraction(scale)


def _rescale(value, numerator: int, denominator: int):
    """
    Compute value * numerator / denominator for a float or numpy array

    Multiplying first keeps exact results such as 100 * 9 / 5 == 180. Where
    that intermediate product overflows but the value itself is finite, the
    division is done first instead.
    """
    with np.errstate(over='ignore'):
        result = value * numerator / denominator

        if isinstance(result, np.ndarray):
            overflowed = np.isfinite(value) & ~np.isfinite(result)
            if overflowed.any():
                result = np.where(overflowed, value / denominator * numerator, result)
            return result

    if math.isfinite(value) and not math.isfinite(result):
        result = value / denominator * numerator
    return result


@dataclass(frozen=True)
class UnitDefinition:
    """
    Definition of a single unit within a category

    The transform pair is affine:

        to_base(v)   = (v + offset) * scale
        from_base(b) = b / scale - offset

    ``offset`` is expressed in this unit's own scale (Fahrenheit uses
    offset -32 and scale 5/9) and is zero for every pure-scale unit.
    ``scale`` is kept as an exact fraction and applied as numerator and
    denominator separately.
    """
    id: str  # Identifier, unique within its category (e.g. "foot")
    name: str  # Display name (e.g. "Foot")
    symbol: str  # Display symbol (e.g. "ft")
    scale: ScaleLike = 1  # Base units per (offset-adjusted) unit
    offset: float = 0.0  # Added before scaling, in this unit's scale

    def __post_init__(self):
        """Validate unit definition after creation"""
        if not self.id:
            raise ConfigurationError("Unit id cannot be empty", parameter='id')

        scale = _as_fraction(self.scale)
        if scale == 0:
            raise ConfigurationError(f"Scale of unit '{self.id}' must be non-zero",
                                     parameter='scale')
        object.__setattr__(self, 'scale', scale)

        if not math.isfinite(self.offset):
            raise ConfigurationError(f"Offset of unit '{self.id}' must be finite",
                                     parameter='offset')
        object.__setattr__(self, 'offset', float(self.offset))

    @property
    def is_identity(self) -> bool:
        return self.scale == 1 and self.offset == 0

    def to_base(self, value):
        """Convert a value (float or numpy array) from this unit to the base unit"""
        if self.offset:
            value = value + self.offset
        return _rescale(value, self.scale.numerator, self.scale.denominator)

    def from_base(self, value):
        """Convert a value (float or numpy array) from the base unit to this unit"""
        value = _rescale(value, self.scale.denominator, self.scale.numerator)
        if self.offset:
            value = value - self.offset
        return value

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'name': self.name, 'symbol': self.symbol}


@dataclass(frozen=True)
class QuickConversion:
    """Preset conversion offered alongside a category (e.g. "1 m to ft")"""
    value: float
    from_unit: str
    to_unit: str
    label: str


@dataclass(frozen=True)
class CategoryDefinition:
    """
    Measurement category owning an ordered set of units

    Exactly one unit is the base unit and its transforms are the identity.
    Units are never shared between categories.
    """
    id: str
    name: str
    base_unit: str
    units: Tuple[UnitDefinition, ...]
    icon: str = ""
    quick_conversions: Tuple[QuickConversion, ...] = ()
    _index: Mapping[str, UnitDefinition] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate category definition and build the unit index"""
        object.__setattr__(self, 'units', tuple(self.units))
        object.__setattr__(self, 'quick_conversions', tuple(self.quick_conversions))

        if not self.units:
            raise ConfigurationError(f"Category '{self.id}' has no units", self.id, 'units')

        index: Dict[str, UnitDefinition] = {}
        for unit in self.units:
            if unit.id in index:
                raise ConfigurationError(f"Duplicate unit '{unit.id}' in category '{self.id}'",
                                         self.id, unit.id)
            index[unit.id] = unit

        base = index.get(self.base_unit)
        if base is None:
            raise ConfigurationError(f"Base unit '{self.base_unit}' is not defined in '{self.id}'",
                                     self.id, 'base_unit')
        if not base.is_identity:
            raise ConfigurationError(f"Base unit '{self.base_unit}' must be the identity transform",
                                     self.id, 'base_unit')

        for preset in self.quick_conversions:
            for unit_id in (preset.from_unit, preset.to_unit):
                if unit_id not in index:
                    raise ConfigurationError(
                        f"Quick conversion '{preset.label}' references unknown unit '{unit_id}'",
                        self.id, 'quick_conversions')

        object.__setattr__(self, '_index', MappingProxyType(index))

    def get_unit(self, unit_id: str) -> Optional[UnitDefinition]:
        return self._index.get(unit_id)

    @property
    def unit_ids(self) -> List[str]:
        return [unit.id for unit in self.units]

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'name': self.name, 'icon': self.icon}


# ===================================================================
# DEFAULT CATALOGUE
# ===================================================================

LENGTH = CategoryDefinition(
    id='length', name='Length', icon='📏', base_unit='meter',
    units=(
        UnitDefinition('nanometer', 'Nanometer', 'nm', '1e-9'),
        UnitDefinition('micrometer', 'Micrometer', 'µm', '1e-6'),
        UnitDefinition('millimeter', 'Millimeter', 'mm', '0.001'),
        UnitDefinition('centimeter', 'Centimeter', 'cm', '0.01'),
        UnitDefinition('meter', 'Meter', 'm'),
        UnitDefinition('kilometer', 'Kilometer', 'km', 1000),
        UnitDefinition('inch', 'Inch', 'in', '0.0254'),
        UnitDefinition('foot', 'Foot', 'ft', '0.3048'),
        UnitDefinition('yard', 'Yard', 'yd', '0.9144'),
        UnitDefinition('mile', 'Mile', 'mi', '1609.344'),
        UnitDefinition('nautical-mile', 'Nautical Mile', 'nmi', 1852),
        UnitDefinition('light-year', 'Light Year', 'ly', '9.461e15'),
    ),
    quick_conversions=(
        QuickConversion(1, 'meter', 'foot', '1 m to ft'),
        QuickConversion(1, 'inch', 'centimeter', '1 in to cm'),
        QuickConversion(1, 'kilometer', 'mile', '1 km to mi'),
        QuickConversion(1, 'foot', 'meter', '1 ft to m'),
    ),
)

WEIGHT = CategoryDefinition(
    id='weight', name='Weight', icon='⚖️', base_unit='kilogram',
    units=(
        UnitDefinition('milligram', 'Milligram', 'mg', '1e-6'),
        UnitDefinition('gram', 'Gram', 'g', '0.001'),
        UnitDefinition('kilogram', 'Kilogram', 'kg'),
        UnitDefinition('metric-ton', 'Metric Ton', 't', 1000),
        UnitDefinition('ounce', 'Ounce', 'oz', '0.0283495'),
        UnitDefinition('pound', 'Pound', 'lb', '0.453592'),
        UnitDefinition('stone', 'Stone', 'st', '6.35029'),
        UnitDefinition('us-ton', 'US Ton', 'ton', '907.185'),
        UnitDefinition('carat', 'Carat', 'ct', '0.0002'),
    ),
    quick_conversions=(
        QuickConversion(1, 'kilogram', 'pound', '1 kg to lb'),
        QuickConversion(1, 'pound', 'kilogram', '1 lb to kg'),
        QuickConversion(100, 'gram', 'ounce', '100 g to oz'),
        QuickConversion(1, 'stone', 'kilogram', '1 st to kg'),
    ),
)

TEMPERATURE = CategoryDefinition(
    id='temperature', name='Temperature', icon='🌡️', base_unit='celsius',
    units=(
        UnitDefinition('celsius', 'Celsius', '°C'),
        UnitDefinition('fahrenheit', 'Fahrenheit', '°F', Fraction(5, 9), -32.0),
        UnitDefinition('kelvin', 'Kelvin', 'K', 1, -273.15),
        UnitDefinition('rankine', 'Rankine', '°R', Fraction(5, 9), -491.67),
    ),
    quick_conversions=(
        QuickConversion(0, 'celsius', 'fahrenheit', '0°C to °F'),
        QuickConversion(100, 'celsius', 'fahrenheit', '100°C to °F'),
        QuickConversion(32, 'fahrenheit', 'celsius', '32°F to °C'),
        QuickConversion(0, 'celsius', 'kelvin', '0°C to K'),
    ),
)

VOLUME = CategoryDefinition(
    id='volume', name='Volume', icon='🧪', base_unit='liter',
    units=(
        UnitDefinition('milliliter', 'Milliliter', 'mL', '0.001'),
        UnitDefinition('liter', 'Liter', 'L'),
        UnitDefinition('cubic-meter', 'Cubic Meter', 'm³', 1000),
        UnitDefinition('fluid-ounce-us', 'Fluid Ounce (US)', 'fl oz', '0.0295735'),
        UnitDefinition('cup-us', 'Cup (US)', 'cup', '0.236588'),
        UnitDefinition('pint-us', 'Pint (US)', 'pt', '0.473176'),
        UnitDefinition('quart-us', 'Quart (US)', 'qt', '0.946353'),
        UnitDefinition('gallon-us', 'Gallon (US)', 'gal', '3.78541'),
        UnitDefinition('fluid-ounce-uk', 'Fluid Ounce (UK)', 'fl oz (UK)', '0.0284131'),
        UnitDefinition('pint-uk', 'Pint (UK)', 'pt (UK)', '0.568261'),
        UnitDefinition('gallon-uk', 'Gallon (UK)', 'gal (UK)', '4.54609'),
    ),
    quick_conversions=(
        QuickConversion(1, 'liter', 'gallon-us', '1 L to gal (US)'),
        QuickConversion(1, 'gallon-us', 'liter', '1 gal to L'),
        QuickConversion(1, 'cup-us', 'milliliter', '1 cup to mL'),
        QuickConversion(500, 'milliliter', 'pint-us', '500 mL to pt'),
    ),
)

AREA = CategoryDefinition(
    id='area', name='Area', icon='📐', base_unit='square-meter',
    units=(
        UnitDefinition('square-millimeter', 'Square Millimeter', 'mm²', '1e-6'),
        UnitDefinition('square-centimeter', 'Square Centimeter', 'cm²', '1e-4'),
        UnitDefinition('square-meter', 'Square Meter', 'm²'),
        UnitDefinition('hectare', 'Hectare', 'ha', 10000),
        UnitDefinition('square-kilometer', 'Square Kilometer', 'km²', 1000000),
        UnitDefinition('square-inch', 'Square Inch', 'in²', '0.00064516'),
        UnitDefinition('square-foot', 'Square Foot', 'ft²', '0.092903'),
        UnitDefinition('square-yard', 'Square Yard', 'yd²', '0.836127'),
        UnitDefinition('acre', 'Acre', 'ac', '4046.86'),
        UnitDefinition('square-mile', 'Square Mile', 'mi²', 2589988),
    ),
    quick_conversions=(
        QuickConversion(1, 'square-meter', 'square-foot', '1 m² to ft²'),
        QuickConversion(1, 'acre', 'hectare', '1 ac to ha'),
        QuickConversion(1, 'hectare', 'acre', '1 ha to ac'),
        QuickConversion(100, 'square-foot', 'square-meter', '100 ft² to m²'),
    ),
)

SPEED = CategoryDefinition(
    id='speed', name='Speed', icon='🚀', base_unit='meter-per-second',
    units=(
        UnitDefinition('meter-per-second', 'Meter/Second', 'm/s'),
        UnitDefinition('kilometer-per-hour', 'Kilometer/Hour', 'km/h', Fraction(5, 18)),
        UnitDefinition('mile-per-hour', 'Mile/Hour', 'mph', '0.44704'),
        UnitDefinition('foot-per-second', 'Foot/Second', 'ft/s', '0.3048'),
        UnitDefinition('knot', 'Knot', 'kn', '0.514444'),
        UnitDefinition('mach', 'Mach (speed of sound)', 'Ma', 343),
    ),
    quick_conversions=(
        QuickConversion(100, 'kilometer-per-hour', 'mile-per-hour', '100 km/h to mph'),
        QuickConversion(60, 'mile-per-hour', 'kilometer-per-hour', '60 mph to km/h'),
        QuickConversion(10, 'meter-per-second', 'kilometer-per-hour', '10 m/s to km/h'),
        QuickConversion(1, 'mach', 'kilometer-per-hour', '1 Ma to km/h'),
    ),
)

TIME = CategoryDefinition(
    id='time', name='Time', icon='⏱️', base_unit='second',
    units=(
        UnitDefinition('millisecond', 'Millisecond', 'ms', '0.001'),
        UnitDefinition('second', 'Second', 's'),
        UnitDefinition('minute', 'Minute', 'min', 60),
        UnitDefinition('hour', 'Hour', 'hr', 3600),
        UnitDefinition('day', 'Day', 'd', 86400),
        UnitDefinition('week', 'Week', 'wk', 604800),
        UnitDefinition('month', 'Month (30d)', 'mo', 2592000),
        UnitDefinition('year', 'Year (365d)', 'yr', 31536000),
    ),
    quick_conversions=(
        QuickConversion(1, 'hour', 'minute', '1 hr to min'),
        QuickConversion(1, 'day', 'hour', '1 d to hr'),
        QuickConversion(1, 'week', 'day', '1 wk to d'),
        QuickConversion(1, 'year', 'week', '1 yr to wk'),
    ),
)

# Binary multiples: 1 KB = 1024 B
DATA = CategoryDefinition(
    id='data', name='Data', icon='💾', base_unit='byte',
    units=(
        UnitDefinition('bit', 'Bit', 'b', Fraction(1, 8)),
        UnitDefinition('kilobit', 'Kilobit', 'Kb', 128),
        UnitDefinition('megabit', 'Megabit', 'Mb', 131072),
        UnitDefinition('byte', 'Byte', 'B'),
        UnitDefinition('kilobyte', 'Kilobyte', 'KB', 1024),
        UnitDefinition('megabyte', 'Megabyte', 'MB', 1024 ** 2),
        UnitDefinition('gigabyte', 'Gigabyte', 'GB', 1024 ** 3),
        UnitDefinition('terabyte', 'Terabyte', 'TB', 1024 ** 4),
    ),
    quick_conversions=(
        QuickConversion(1, 'gigabyte', 'megabyte', '1 GB to MB'),
        QuickConversion(1, 'megabyte', 'kilobyte', '1 MB to KB'),
        QuickConversion(1, 'byte', 'bit', '1 B to b'),
        QuickConversion(100, 'megabit', 'megabyte', '100 Mb to MB'),
    ),
)

PRESSURE = CategoryDefinition(
    id='pressure', name='Pressure', icon='💨', base_unit='pascal',
    units=(
        UnitDefinition('pascal', 'Pascal', 'Pa'),
        UnitDefinition('kilopascal', 'Kilopascal', 'kPa', 1000),
        UnitDefinition('megapascal', 'Megapascal', 'MPa', 1000000),
        UnitDefinition('bar', 'Bar', 'bar', 100000),
        UnitDefinition('atmosphere', 'Atmosphere', 'atm', 101325),
        UnitDefinition('torr', 'Torr', 'Torr', '133.322'),
        UnitDefinition('psi', 'Pound per Square Inch', 'psi', 6895),
        UnitDefinition('mmhg', 'Millimeter of Mercury', 'mmHg', '133.322'),
    ),
    quick_conversions=(
        QuickConversion(1, 'bar', 'psi', '1 bar to psi'),
        QuickConversion(1, 'atmosphere', 'pascal', '1 atm to Pa'),
        QuickConversion(30, 'psi', 'bar', '30 psi to bar'),
        QuickConversion(760, 'mmhg', 'atmosphere', '760 mmHg to atm'),
    ),
)

ENERGY = CategoryDefinition(
    id='energy', name='Energy', icon='⚡', base_unit='joule',
    units=(
        UnitDefinition('joule', 'Joule', 'J'),
        UnitDefinition('kilojoule', 'Kilojoule', 'kJ', 1000),
        UnitDefinition('calorie', 'Calorie', 'cal', '4.184'),
        UnitDefinition('kilocalorie', 'Kilocalorie', 'kcal', 4184),
        UnitDefinition('watt-hour', 'Watt Hour', 'Wh', 3600),
        UnitDefinition('kilowatt-hour', 'Kilowatt Hour', 'kWh', 3600000),
        UnitDefinition('btu', 'British Thermal Unit', 'BTU', '1055.06'),
        UnitDefinition('foot-pound', 'Foot-Pound', 'ft-lb', '1.35582'),
    ),
    quick_conversions=(
        QuickConversion(1, 'kilowatt-hour', 'joule', '1 kWh to J'),
        QuickConversion(1000, 'calorie', 'joule', '1000 cal to J'),
        QuickConversion(1, 'btu', 'kilojoule', '1 BTU to kJ'),
        QuickConversion(1, 'kilocalorie', 'kilojoule', '1 kcal to kJ'),
    ),
)

DEFAULT_CATEGORIES: Tuple[CategoryDefinition, ...] = (
    LENGTH, WEIGHT, TEMPERATURE, VOLUME, AREA, SPEED, TIME, DATA, PRESSURE, ENERGY,
)
