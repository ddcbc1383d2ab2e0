from fractions import Fraction

import numpy as np
import pytest

from unit_engine.core.exceptions import ConfigurationError
from unit_engine.core.units.definitions import (
    DEFAULT_CATEGORIES,
    CategoryDefinition,
    QuickConversion,
    UnitDefinition
)


def test_scale_is_stored_exactly():
    assert UnitDefinition('foot', 'Foot', 'ft', '0.3048').scale == Fraction(381, 1250)
    assert UnitDefinition('foot', 'Foot', 'ft', 0.3048).scale == Fraction(381, 1250)
    assert UnitDefinition('km', 'Kilometer', 'km', 1000).scale == 1000


@pytest.mark.parametrize('scale', [0, '0', 0.0, float('inf'), float('nan')])
def test_invalid_scale_rejected(scale):
    with pytest.raises(ConfigurationError):
        UnitDefinition('bad', 'Bad', 'x', scale)


def test_non_finite_offset_rejected():
    with pytest.raises(ConfigurationError):
        UnitDefinition('bad', 'Bad', 'x', 1, float('nan'))


def test_affine_transform_pair():
    fahrenheit = UnitDefinition('fahrenheit', 'Fahrenheit', '°F', Fraction(5, 9), -32.0)

    assert fahrenheit.to_base(212) == 100
    assert fahrenheit.to_base(32) == 0
    assert fahrenheit.from_base(100) == 212
    assert fahrenheit.from_base(-40) == -40


def test_transforms_accept_arrays():
    inch = UnitDefinition('inch', 'Inch', 'in', '0.0254')
    values = np.array([0.0, 1.0, 100.0])

    np.testing.assert_allclose(inch.to_base(values), [0.0, 0.0254, 2.54])
    np.testing.assert_allclose(inch.from_base(inch.to_base(values)), values)


def test_category_requires_identity_base_unit():
    with pytest.raises(ConfigurationError, match="identity"):
        CategoryDefinition('length', 'Length', 'foot',
                           (UnitDefinition('foot', 'Foot', 'ft', '0.3048'),))


def test_category_requires_defined_base_unit():
    with pytest.raises(ConfigurationError, match="not defined"):
        CategoryDefinition('length', 'Length', 'meter',
                           (UnitDefinition('foot', 'Foot', 'ft', '0.3048'),))


def test_category_rejects_duplicate_units():
    with pytest.raises(ConfigurationError, match="Duplicate"):
        CategoryDefinition('length', 'Length', 'meter', (
            UnitDefinition('meter', 'Meter', 'm'),
            UnitDefinition('meter', 'Metre', 'm'),
        ))


def test_category_rejects_empty_unit_list():
    with pytest.raises(ConfigurationError):
        CategoryDefinition('empty', 'Empty', 'none', ())


def test_quick_conversions_must_reference_category_units():
    with pytest.raises(ConfigurationError, match="unknown unit"):
        CategoryDefinition('length', 'Length', 'meter',
                           (UnitDefinition('meter', 'Meter', 'm'),),
                           quick_conversions=(QuickConversion(1, 'meter', 'foot', '1 m to ft'),))


def test_category_preserves_unit_order():
    category = CategoryDefinition('length', 'Length', 'meter', (
        UnitDefinition('foot', 'Foot', 'ft', '0.3048'),
        UnitDefinition('meter', 'Meter', 'm'),
        UnitDefinition('inch', 'Inch', 'in', '0.0254'),
    ))

    assert category.unit_ids == ['foot', 'meter', 'inch']
    assert category.get_unit('inch').symbol == 'in'
    assert category.get_unit('mile') is None


def test_default_catalogue():
    ids = [category.id for category in DEFAULT_CATEGORIES]

    for required in ('length', 'weight', 'temperature', 'volume', 'area', 'speed', 'time', 'data'):
        assert required in ids

    for category in DEFAULT_CATEGORIES:
        assert category.get_unit(category.base_unit).is_identity
        assert sum(unit.is_identity for unit in category.units) == 1
        assert category.icon


def test_only_temperature_units_have_offsets():
    for category in DEFAULT_CATEGORIES:
        for unit in category.units:
            if category.id != 'temperature':
                assert unit.offset == 0, unit.id
