"""
Units Module for the Unit Engine

Category registry, conversion service and result formatter for the
length/weight/temperature/volume/area/speed/time/data converters.
"""

from .converter import ConversionService, coerce_value
from .definitions import (
    DEFAULT_CATEGORIES,
    CategoryDefinition,
    QuickConversion,
    UnitDefinition
)
from .formatter import FormatPolicy, ResultFormatter
from .registry import CategoryRegistry

# Create default service instance
default_service = ConversionService()


# Convenience functions using default service
def list_categories():
    """List registered categories as ``{id, name, icon}`` dicts"""
    return default_service.list_categories()


def list_units(category_id):
    """List units of a category as ``{id, name, symbol}`` dicts"""
    return default_service.list_units(category_id)


def convert(category_id, from_unit, to_unit, value):
    """Convert a value using the default service"""
    return default_service.convert(category_id, from_unit, to_unit, value)


def format_value(value, category_id=None):
    """Format a number with the default formatting policy"""
    return default_service.formatter.format(value, category_id)


__all__ = [
    'ConversionService',
    'CategoryRegistry',
    'CategoryDefinition',
    'UnitDefinition',
    'QuickConversion',
    'DEFAULT_CATEGORIES',
    'FormatPolicy',
    'ResultFormatter',
    'coerce_value',
    'default_service',
    'list_categories',
    'list_units',
    'convert',
    'format_value'
]
