import pytest

import unit_engine


def test_public_api():
    categories = unit_engine.list_categories()
    assert {'id': 'temperature', 'name': 'Temperature', 'icon': '🌡️'} in categories

    units = unit_engine.list_units('length')
    assert {'id': 'foot', 'name': 'Foot', 'symbol': 'ft'} in units

    result = unit_engine.convert('temperature', 'celsius', 'fahrenheit', 0)
    assert result.to_dict() == {'value': 32, 'display': '32'}


def test_public_errors_share_a_base_class():
    with pytest.raises(unit_engine.ConversionError):
        unit_engine.convert('length', 'celsius', 'meter', 1)

    with pytest.raises(unit_engine.UnitEngineError):
        unit_engine.list_units('currency')
