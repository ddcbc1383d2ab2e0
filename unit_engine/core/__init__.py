"""Core data model, errors and conversion engine"""

from .data_structures import ConversionRequest, ConversionResult, ConversionTableRow
from .exceptions import (
    ComputationOverflow,
    ConfigurationError,
    ConversionError,
    InvalidInput,
    UnitEngineError,
    UnknownCategory,
    UnknownUnit
)

__all__ = [
    'ConversionRequest', 'ConversionResult', 'ConversionTableRow',
    'UnitEngineError', 'ConversionError', 'UnknownCategory', 'UnknownUnit',
    'InvalidInput', 'ComputationOverflow', 'ConfigurationError'
]
