"""Configuration for the Unit Engine"""

from .engine_config import EngineConfiguration

__all__ = ['EngineConfiguration']
