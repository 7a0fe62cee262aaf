"""Errors raised while parsing keys, building section trees and loading files.

Hierarchy:
    ConfscopeError
    ├── ValidationError
    │   ├── MalformedKeyError
    │   ├── DuplicateKeyError
    │   └── ValueConversionError
    ├── ResourceNotFoundError
    │   ├── SectionNotFoundError
    │   └── KeyNotFoundError
    └── ConfigurationError
        ├── ConfigFileError
        ├── InvalidConfigurationError
        └── ConfigParseError
            └── ReservedKeyError
"""

from typing import Any, Dict, Optional

from confscope.exceptions.base import (
    ConfigurationError,
    ResourceNotFoundError,
    ValidationError,
)


class MalformedKeyError(ValidationError):
    """Raised when a key string does not match `[ENV.][INSTANCE.]NAME`."""

    def __init__(self, key: str, reason: str = "config key has invalid format"):
        super().__init__(
            code="MALFORMED_KEY",
            message=f"{reason}: '{key}'",
            details={"key": key},
        )
        self.key = key


class DuplicateKeyError(ValidationError):
    """Raised when two definitions of a key have the same precision score."""

    def __init__(self, key: str, existing: str, precision: int):
        super().__init__(
            code="DUPLICATE_KEY",
            message=f"key already exists: '{key}' collides with '{existing}'",
            details={"key": key, "existing": existing, "precision": precision},
        )
        self.key = key


class ValueConversionError(ValidationError):
    """Raised when a stored value cannot be converted to the requested type."""

    def __init__(self, name: str, value: str, target: str):
        super().__init__(
            code="VALUE_CONVERSION",
            message=f"invalid {target} value for '{name}': '{value}'",
            details={"key": name, "value": value, "type": target},
        )


class SectionNotFoundError(ResourceNotFoundError):
    """Raised when a section has no child with the requested name."""

    def __init__(self, name: str):
        super().__init__(
            code="SECTION_NOT_FOUND",
            message=f"configuration section not found '{name}'",
            details={"section": name},
        )


class KeyNotFoundError(ResourceNotFoundError):
    """Raised when a required key is absent from a section."""

    def __init__(self, name: str, section: Optional[str] = None):
        details: Dict[str, Any] = {"key": name}
        if section is not None:
            details["section"] = section
        super().__init__(
            code="KEY_NOT_FOUND",
            message=f"configuration item not found '{name}'",
            details=details,
        )


class ConfigFileError(ConfigurationError):
    """Raised when a configuration file cannot be opened, decoded or tokenized."""

    def __init__(self, filename: str, reason: str, line: Optional[int] = None):
        details: Dict[str, Any] = {"filename": filename}
        location = filename
        if line is not None:
            details["line"] = line
            location = f"{filename}:{line}"
        super().__init__(
            code="CONFIG_FILE",
            message=f"cannot parse config file '{location}': {reason}",
            details=details,
        )
        self.filename = filename
        self.line = line


class InvalidConfigurationError(ConfigurationError):
    """Raised when load parameters or settings are unusable (e.g. empty environment)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_CONFIGURATION", message=message, details=details)


class ConfigParseError(ConfigurationError):
    """Raised when an entry of an otherwise readable file cannot be applied.

    The message parameter comes first so the loader can wrap lower level
    errors with the offending key and value.
    """

    def __init__(
        self, message: str, code: str = "CONFIG_PARSE", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class ReservedKeyError(ConfigParseError):
    """Raised when the file defines a key the loader injects itself."""

    def __init__(self, name: str):
        super().__init__(
            f"cannot provide auto key '{name}' because is already defined; "
            "remove definition from config file",
            code="RESERVED_KEY",
            details={"key": name},
        )
        self.key = name
