import pytest

from unit_engine.core.units.converter import ConversionService
from unit_engine.core.units.registry import CategoryRegistry


@pytest.fixture
def registry():
    return CategoryRegistry()


@pytest.fixture
def service(registry):
    return ConversionService(registry)
