"""Configuration and logging setup for treefitter."""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from .types import ConfigurationError, FormatType

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LogLevel(Enum):
    """Enumeration of supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    def to_logging(self) -> int:
        """Convert to the numeric level used by the logging module."""
        return getattr(logging, self.value)


@dataclass(frozen=True)
class Configuration:
    """
    Immutable settings shared by the engine, operations and CLI.

    Attributes:
        log_level: Level applied by ``configure_logging``
        enable_semantic_transforms: When False, conversion returns its input
        default_format: Format assumed when a caller does not name one
    """

    log_level: LogLevel = LogLevel.INFO
    enable_semantic_transforms: bool = True
    default_format: FormatType = FormatType.JSON

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.log_level, LogLevel):
            raise ConfigurationError(f"Invalid log_level: {self.log_level!r}")
        if not isinstance(self.default_format, FormatType):
            raise ConfigurationError(f"Invalid default_format: {self.default_format!r}")
        if not isinstance(self.enable_semantic_transforms, bool):
            raise ConfigurationError("enable_semantic_transforms must be a boolean")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "logLevel": self.log_level.value,
            "enableSemanticTransforms": self.enable_semantic_transforms,
            "defaultFormat": self.default_format.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Configuration':
        """
        Create Configuration from a dictionary.

        Raises:
            ConfigurationError: If a value cannot be interpreted
        """
        try:
            return cls(
                log_level=LogLevel(str(data.get("logLevel", LogLevel.INFO.value)).upper()),
                enable_semantic_transforms=data.get("enableSemanticTransforms", True),
                default_format=FormatType(data.get("defaultFormat", FormatType.JSON.value))
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}", context=data) from e

    def merged(self, overrides: Optional[Dict[str, Any]] = None) -> 'Configuration':
        """
        Return a new configuration with field overrides applied.

        Raises:
            ConfigurationError: If an override names an unknown field
        """
        overrides = overrides or {}
        known = {f.name for f in dataclasses.fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **overrides)


def configure_logging(config: Optional[Configuration] = None) -> None:
    """
    Configure logging from a configuration's ``log_level``.

    Root handlers are installed with the package's format when none exist;
    the ``treefitter`` logger always gets the configured level.
    """
    level = (config or Configuration()).log_level.to_logging()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("treefitter").setLevel(level)
