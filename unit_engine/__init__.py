"""
Unit Engine

Multi-domain unit conversion: a registry of measurement categories, a
conversion service that converts through each category's base unit, and a
formatter that keeps results legible across many orders of magnitude.
"""

__version__ = "1.0.0"

# Core imports for public API
from .core.data_structures import ConversionRequest, ConversionResult, ConversionTableRow
from .core.exceptions import (
    ComputationOverflow,
    ConfigurationError,
    ConversionError,
    InvalidInput,
    UnitEngineError,
    UnknownCategory,
    UnknownUnit
)
from .core.units import (
    CategoryDefinition,
    CategoryRegistry,
    ConversionService,
    FormatPolicy,
    QuickConversion,
    ResultFormatter,
    UnitDefinition,
    convert,
    default_service,
    format_value,
    list_categories,
    list_units
)
from .config.engine_config import EngineConfiguration

# Infrastructure
from .infrastructure.logging.engine_logger import get_logger, setup_logging

__all__ = [
    # Core classes
    'CategoryRegistry', 'CategoryDefinition', 'UnitDefinition', 'QuickConversion',
    'ConversionService', 'ResultFormatter', 'FormatPolicy', 'EngineConfiguration',
    'ConversionRequest', 'ConversionResult', 'ConversionTableRow',

    # Errors
    'UnitEngineError', 'ConversionError', 'UnknownCategory', 'UnknownUnit',
    'InvalidInput', 'ComputationOverflow', 'ConfigurationError',

    # Convenience functions
    'list_categories', 'list_units', 'convert', 'format_value', 'default_service',
    'setup_logging', 'get_logger',

    # Version info
    '__version__'
]
