"""
Unified exception hierarchy for formshare.

All exception classes live here. No per-module exception files.

Hierarchy:
    FormShareError (base)
    ├── PreprocessingError
    ├── DependencyExtractionError
    ├── ScannerError
    └── ConfigurationError

Usage:
    from formshare.exceptions import DependencyExtractionError
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# ROOT
# =============================================================================


class FormShareError(Exception):
    """
    Base exception for all formshare errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about what was being done
        details: Technical details (form uuid, scanner name, etc.)
    """

    def __init__(
        self,
        message: str,
        context: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.context = context
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.context:
            parts.append(f"Context: {self.context}")
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"Details: {detail_str}")
        return ". ".join(parts)


# =============================================================================
# EXTRACTION
# =============================================================================


class PreprocessingError(FormShareError):
    """Raised by a preprocessor when macro or template syntax is malformed."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if stage:
            details["stage"] = stage
        super().__init__(message, details=details, **kwargs)
        self.stage = stage


class DependencyExtractionError(FormShareError):
    """
    Raised when dependencies cannot be calculated for a form.

    Wraps whatever the markup preprocessor raised; the original exception is
    available as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        form_uuid: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if form_uuid:
            details["form_uuid"] = form_uuid
        super().__init__(message, details=details, **kwargs)
        self.form_uuid = form_uuid


class ScannerError(FormShareError):
    """Raised when a scanner cannot be constructed or run."""

    def __init__(
        self,
        message: str,
        scanner_name: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if scanner_name:
            details["scanner"] = scanner_name
        super().__init__(message, details=details, **kwargs)
        self.scanner_name = scanner_name


# =============================================================================
# CONFIGURATION
# =============================================================================


class ConfigurationError(FormShareError):
    """Raised when settings cannot be loaded or are invalid."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if config_path:
            details["config_path"] = config_path
        super().__init__(message, details=details, **kwargs)
        self.config_path = config_path


__all__ = [
    "FormShareError",
    "PreprocessingError",
    "DependencyExtractionError",
    "ScannerError",
    "ConfigurationError",
]
