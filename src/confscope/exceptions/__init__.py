"""Exceptions for confscope.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from confscope.exceptions import ConfscopeError, KeyNotFoundError

    try:
        timeout = section.get_as_int("timeout")
    except KeyNotFoundError as e:
        print(e.to_dict())
"""

from confscope.exceptions.base import (
    ConfigurationError,
    ConfscopeError,
    ResourceNotFoundError,
    ValidationError,
)
from confscope.exceptions.config_errors import (
    ConfigFileError,
    ConfigParseError,
    DuplicateKeyError,
    InvalidConfigurationError,
    KeyNotFoundError,
    MalformedKeyError,
    ReservedKeyError,
    SectionNotFoundError,
    ValueConversionError,
)

__all__ = [
    # Base exceptions
    "ConfscopeError",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    # Key and tree errors
    "MalformedKeyError",
    "DuplicateKeyError",
    "ValueConversionError",
    "SectionNotFoundError",
    "KeyNotFoundError",
    # Load errors
    "ConfigFileError",
    "InvalidConfigurationError",
    "ConfigParseError",
    "ReservedKeyError",
]
