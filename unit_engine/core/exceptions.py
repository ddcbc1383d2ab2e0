"""
Custom Exceptions for the Unit Engine

Exception hierarchy for the conversion engine. Every error is scoped to a
single call and carries the identifiers involved so callers can decide
how to present it.
"""

from typing import Any, Dict, List


class UnitEngineError(Exception):
    """Base exception for all unit engine errors"""

    def __init__(self, message: str, details: dict = None):
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        base_msg = super().__str__()
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base_msg} (Details: {detail_str})"
        return base_msg


class ConversionError(UnitEngineError):
    """Base class for errors raised by a single conversion request"""


class UnknownCategory(ConversionError):
    """Raised when a category id is not registered"""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Unknown category: '{category_id}'", {'category': category_id})


class UnknownUnit(ConversionError):
    """Raised when a unit id does not exist within the requested category"""

    def __init__(self, category_id: str, unit_id: str):
        self.category_id = category_id
        self.unit_id = unit_id
        super().__init__(f"Unknown unit '{unit_id}' in category '{category_id}'",
                         {'category': category_id, 'unit': unit_id})


class InvalidInput(ConversionError):
    """Raised when the input value is non-numeric or non-finite"""

    def __init__(self, value: Any, reason: str = None):
        self.value = value
        message = f"Invalid input value: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ComputationOverflow(ConversionError):
    """Raised when a conversion of finite input produces a non-finite result"""

    def __init__(self, category_id: str = None, from_unit: str = None,
                 to_unit: str = None, value: Any = None):
        details = {}
        if category_id:
            details['category'] = category_id
        if from_unit:
            details['from_unit'] = from_unit
        if to_unit:
            details['to_unit'] = to_unit
        if value is not None:
            details['value'] = value
        super().__init__("Conversion produced a non-finite result", details)


class ConfigurationError(UnitEngineError):
    """Raised when catalogue definitions or engine configuration are invalid"""

    def __init__(self, message: str, config_section: str = None, parameter: str = None):
        details = {}
        if config_section:
            details['section'] = config_section
        if parameter:
            details['parameter'] = parameter
        super().__init__(message, details)


def create_error_summary(errors: List[Exception]) -> Dict[str, Any]:
    """
    Create summary of errors for reporting

    Args:
        errors: List of exceptions

    Returns:
        Dictionary with error summary
    """
    error_counts = {}
    error_details = []

    for error in errors:
        error_type = type(error).__name__
        error_counts[error_type] = error_counts.get(error_type, 0) + 1

        error_info = {
            'type': error_type,
            'message': str(error),
        }

        if hasattr(error, 'details'):
            error_info['details'] = error.details

        error_details.append(error_info)

    return {
        'total_errors': len(errors),
        'error_counts': error_counts,
        'error_details': error_details
    }
