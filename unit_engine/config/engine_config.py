"""Engine configuration"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.exceptions import ConfigurationError
from ..core.units.converter import ConversionService
from ..core.units.formatter import FormatPolicy, ResultFormatter
from ..core.units.registry import CategoryRegistry


@dataclass
class EngineConfiguration:
    """
    Deployment settings for the conversion engine

    Example JSON file::

        {
            "formatting": {"scientific_upper": 1e9, "precision": 4},
            "category_formatting": {
                "data": {"group_separator": " "}
            }
        }

    Category overrides are complete policies: options missing from an
    override fall back to the defaults of FormatPolicy, not to the
    deployment-wide values.
    """
    formatting: FormatPolicy = field(default_factory=FormatPolicy)
    category_formatting: Dict[str, FormatPolicy] = field(default_factory=dict)

    def validate(self, registry: Optional[CategoryRegistry] = None) -> bool:
        """
        Validate configuration

        Args:
            registry: Registry that overrides must refer to (defaults to
                      the built-in catalogue)

        Raises:
            ConfigurationError: If configuration is invalid
        """
        registry = registry or CategoryRegistry()

        self.formatting.validate()

        for category_id, policy in self.category_formatting.items():
            if category_id not in registry:
                raise ConfigurationError(f"Formatting override for unknown category '{category_id}'",
                                         'category_formatting', category_id)
            policy.validate(f"category_formatting.{category_id}")

        return True

    def build_formatter(self) -> ResultFormatter:
        return ResultFormatter(self.formatting, self.category_formatting)

    def build_service(self, registry: Optional[CategoryRegistry] = None) -> ConversionService:
        """Validate and create a ConversionService using this configuration"""
        registry = registry or CategoryRegistry()
        self.validate(registry)
        return ConversionService(registry, self.build_formatter())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'formatting': self.formatting.to_dict(),
            'category_formatting': {
                category_id: policy.to_dict()
                for category_id, policy in self.category_formatting.items()
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfiguration':
        """Create from dictionary"""
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object")

        unknown = set(data) - {'formatting', 'category_formatting'}
        if unknown:
            raise ConfigurationError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

        try:
            formatting = FormatPolicy.from_dict(data.get('formatting', {}))
            overrides = {
                category_id: FormatPolicy.from_dict(options)
                for category_id, options in data.get('category_formatting', {}).items()
            }
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Malformed formatting section: {e}", 'formatting') from e

        return cls(formatting=formatting, category_formatting=overrides)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'EngineConfiguration':
        """
        Load configuration from a JSON file

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e}") from e

        return cls.from_dict(data)

    def save(self, path: Union[str, Path]):
        """Write configuration to a JSON file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
