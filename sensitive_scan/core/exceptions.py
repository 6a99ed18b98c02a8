# sensitive_scan/core/exceptions.py

"""Custom exception hierarchy for the sensitive data scanner.

Scanning itself never fails on well-formed input; these errors cover
configuration, registry construction, and type-contract violations.
"""


class ScannerError(Exception):
    """Base exception for all application-specific errors."""

    pass


class ConfigurationError(ScannerError):
    """Raised when pattern or settings loading or validation fails."""

    pass


class InitializationError(ScannerError):
    """Raised when the rule registry or redactor fails to initialize."""

    pass


class ValidationError(ScannerError):
    """Raised when input validation fails (e.g., non-string text)."""

    pass
