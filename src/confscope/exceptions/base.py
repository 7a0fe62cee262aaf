"""Base exception classes for confscope.

All confscope exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery
"""

from typing import Any, Dict, Optional


class ConfscopeError(Exception):
    """Base exception for all confscope errors.

    Attributes:
        code: Machine-readable error code (e.g., "DUPLICATE_KEY")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code (e.g., "MALFORMED_KEY")
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(ConfscopeError):
    """Base for validation errors.

    Used when a key string or a stored value fails the syntactic rules.
    """

    pass


class ResourceNotFoundError(ConfscopeError):
    """Base for lookups of keys or sections that do not exist."""

    pass


class ConfigurationError(ConfscopeError):
    """Base for load and setup errors.

    Used when the configuration file, or the parameters of a load, are
    invalid or incomplete.
    """

    pass
