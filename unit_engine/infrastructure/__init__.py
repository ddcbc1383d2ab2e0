"""
Infrastructure Module for the Unit Engine

Logging services shared by the library and the command-line interface.
"""

from .logging.engine_logger import EngineLogger, get_logger, setup_logging, shutdown_logging

__all__ = [
    'EngineLogger',
    'setup_logging',
    'get_logger',
    'shutdown_logging'
]
