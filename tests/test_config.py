import json

import pytest

from unit_engine.config.engine_config import EngineConfiguration
from unit_engine.core.exceptions import ConfigurationError
from unit_engine.core.units.formatter import FormatPolicy


def test_defaults_validate():
    config = EngineConfiguration()

    assert config.validate()
    assert config.formatting == FormatPolicy()
    assert config.category_formatting == {}


def test_from_dict_and_to_dict():
    data = {
        'formatting': {'precision': 4},
        'category_formatting': {'data': {'scientific_upper': 1e15}}
    }
    config = EngineConfiguration.from_dict(data)

    assert config.formatting.precision == 4
    assert config.category_formatting['data'].scientific_upper == 1e15
    assert EngineConfiguration.from_dict(config.to_dict()) == config


def test_from_file(tmp_path):
    path = tmp_path / 'engine.json'
    path.write_text(json.dumps({'formatting': {'group_digits': False}}), encoding='utf-8')

    config = EngineConfiguration.from_file(path)

    assert config.formatting.group_digits is False


def test_save_and_reload(tmp_path):
    config = EngineConfiguration(category_formatting={'time': FormatPolicy(precision=2)})
    path = tmp_path / 'nested' / 'engine.json'

    config.save(path)

    assert EngineConfiguration.from_file(path) == config


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        EngineConfiguration.from_file(tmp_path / 'missing.json')


def test_invalid_json(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{not json', encoding='utf-8')

    with pytest.raises(ConfigurationError):
        EngineConfiguration.from_file(path)


@pytest.mark.parametrize('data', [
    [],
    {'formatting': {'digits': 3}},
    {'logging': {}},
    {'category_formatting': ['data']},
])
def test_malformed_configuration(data):
    with pytest.raises(ConfigurationError):
        EngineConfiguration.from_dict(data)


def test_override_for_unknown_category():
    config = EngineConfiguration(category_formatting={'currency': FormatPolicy()})

    with pytest.raises(ConfigurationError) as excinfo:
        config.validate()

    assert excinfo.value.details['parameter'] == 'currency'


def test_build_service_applies_policies():
    config = EngineConfiguration(
        formatting=FormatPolicy(precision=2),
        category_formatting={'data': FormatPolicy(scientific_upper=1e15)}
    )
    service = config.build_service()

    assert service.convert('data', 'gigabyte', 'byte', 1).display == '1,073,741,824'
    assert service.convert('length', 'light-year', 'meter', 1).display == '9.46e+15'


def test_build_service_validates():
    config = EngineConfiguration(formatting=FormatPolicy(precision=-1))

    with pytest.raises(ConfigurationError):
        config.build_service()
