"""confscope - environment and instance scoped INI configuration.

This package provides:
- config: Key parsing, the section tree, the INI loader and loader settings
- ini: Callback based INI tokenizer
- logger: Structured logging with text or JSON output
- exceptions: Exception classes with structured error info
"""

__version__ = "1.0.0"

from confscope.config import (
    ConfigItem,
    ConfigKey,
    ConfigSection,
    LoaderSettings,
    parse_config,
    parse_config_stream,
    to_structured_value,
)
from confscope.exceptions import (
    ConfigFileError,
    ConfigParseError,
    ConfigurationError,
    ConfscopeError,
    DuplicateKeyError,
    InvalidConfigurationError,
    KeyNotFoundError,
    MalformedKeyError,
    ReservedKeyError,
    ResourceNotFoundError,
    SectionNotFoundError,
    ValidationError,
    ValueConversionError,
)
from confscope.logger import Logger, StructuredLogger, create_logger, get_logger

__all__ = [
    "__version__",
    # Config
    "ConfigKey",
    "ConfigItem",
    "ConfigSection",
    "LoaderSettings",
    "parse_config",
    "parse_config_stream",
    "to_structured_value",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "ConfscopeError",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "MalformedKeyError",
    "DuplicateKeyError",
    "ValueConversionError",
    "SectionNotFoundError",
    "KeyNotFoundError",
    "ConfigFileError",
    "InvalidConfigurationError",
    "ConfigParseError",
    "ReservedKeyError",
]
