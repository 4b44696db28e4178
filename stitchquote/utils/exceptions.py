"""
Custom exception hierarchy for StitchQuote.

Provides a structured exception hierarchy for different error scenarios:
- AppException: Base for all application errors
- ConfigError: Configuration-related errors
- CatalogError: Option catalog errors
- ValidationError: Input validation errors
- SelectionError: Option selection errors
- SessionError: Customization session errors
- StorageError: Snapshot persistence errors

Each exception includes:
- Descriptive message
- Optional error code for programmatic handling
- Optional context dictionary for debugging

Example:
    >>> from stitchquote.utils.exceptions import DesignNotFoundError
    >>> raise DesignNotFoundError(design_id="design_1a2b3c")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# ============================================
# Base Exception
# ============================================


class AppException(Exception):
    """
    Base exception for all StitchQuote application errors.

    Attributes:
        message: Human-readable error description.
        code: Optional error code for programmatic handling.
        context: Optional dictionary with debugging context.

    Example:
        >>> try:
        ...     raise AppException("Something went wrong", code="APP_001")
        ... except AppException as e:
        ...     print(f"Error {e.code}: {e.message}")
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            code: Optional error code (e.g., "CONFIG_INVALID").
            context: Optional dict with additional debugging info.
        """
        self.message = message
        self.code = code or self._default_code()
        self.context = context or {}
        super().__init__(self.message)

    def _default_code(self) -> str:
        """Generate default error code from class name."""
        # CamelCase -> UPPER_SNAKE_CASE
        name = self.__class__.__name__
        code = ""
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                code += "_"
            code += char.upper()
        return code

    def __str__(self) -> str:
        """String representation with code if available."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }


# ============================================
# Configuration Errors
# ============================================


class ConfigError(AppException):
    """
    Base exception for configuration-related errors.

    Raised when there are issues with:
    - Loading configuration files
    - Parsing YAML
    - Validating configuration values
    """

    pass


class ConfigurationError(ConfigError):
    """
    Raised when configuration is invalid or cannot be parsed.

    Example:
        >>> raise ConfigurationError(
        ...     "At least one material rate is required",
        ...     context={"section": "pricing.materials"}
        ... )
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        **kwargs,
    ) -> None:
        super().__init__(message, code="CONFIG_INVALID", **kwargs)


# ============================================
# Catalog Errors
# ============================================


class CatalogError(AppException):
    """
    Base exception for option catalog errors.

    Never escapes the catalog: the catalog degrades to its built-in
    defaults instead.
    """

    pass


class CatalogUnavailableError(CatalogError):
    """
    Raised by an option source when the catalog cannot be fetched.

    Example:
        >>> raise CatalogUnavailableError(
        ...     "Connection refused",
        ...     url="http://localhost:5000/api/embroidery-options",
        ... )
    """

    def __init__(
        self,
        message: str = "Option catalog unavailable",
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if url:
            context["url"] = url
        if status_code:
            context["status_code"] = status_code
        super().__init__(message, code="CATALOG_UNAVAILABLE", context=context, **kwargs)


# ============================================
# Validation Errors
# ============================================


class ValidationError(AppException):
    """
    Base exception for input validation errors.

    Raised when user input or data fails validation.
    """

    pass


class InvalidInputError(ValidationError):
    """Raised when input data is invalid."""

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        value: Any = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)[:100]  # Limit value length
        super().__init__(message, code="INVALID_INPUT", context=context, **kwargs)


class InvalidDesignFileError(ValidationError):
    """
    Raised when an uploaded design file is rejected.

    The message is user-facing.

    Example:
        >>> raise InvalidDesignFileError(
        ...     "File size must be less than 10MB",
        ...     filename="logo.png",
        ...     reason="too_large",
        ... )
    """

    def __init__(
        self,
        message: str = "Invalid design file",
        filename: Optional[str] = None,
        reason: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if filename:
            context["filename"] = filename
        if reason:
            context["reason"] = reason
        super().__init__(message, code="INVALID_DESIGN_FILE", context=context, **kwargs)


class InvalidDimensionsError(ValidationError):
    """Raised when patch dimensions are missing or not positive."""

    def __init__(
        self,
        message: str = "Dimensions must be positive numbers",
        width: Any = None,
        height: Any = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        context["width"] = width
        context["height"] = height
        super().__init__(message, code="INVALID_DIMENSIONS", context=context, **kwargs)


# ============================================
# Selection Errors
# ============================================


class SelectionError(AppException):
    """Base exception for option selection errors."""

    pass


class CategoryArityError(SelectionError):
    """
    Raised when a single-select operation targets a multi-select category
    or the other way round.
    """

    def __init__(
        self,
        message: str = "Operation does not match category arity",
        category: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if category:
            context["category"] = category
        super().__init__(message, code="CATEGORY_ARITY", context=context, **kwargs)


class IncompatibleOptionError(SelectionError):
    """
    Raised when incompatibility enforcement is enabled and a selection
    conflicts with an option already chosen for the design.
    """

    def __init__(
        self,
        message: str = "Option is incompatible with the current selection",
        option_id: Optional[str] = None,
        conflicting_ids: Optional[list[str]] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if option_id:
            context["option_id"] = option_id
        if conflicting_ids:
            context["conflicting_ids"] = conflicting_ids
        super().__init__(message, code="INCOMPATIBLE_OPTION", context=context, **kwargs)


# ============================================
# Session Errors
# ============================================


class SessionError(AppException):
    """Base exception for customization session errors."""

    pass


class DesignNotFoundError(SessionError):
    """Raised when a design id is not part of the session."""

    def __init__(
        self,
        message: str = "Design not found",
        design_id: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if design_id:
            context["design_id"] = design_id
        super().__init__(message, code="DESIGN_NOT_FOUND", context=context, **kwargs)


class DesignLimitError(SessionError):
    """Raised when the session already holds the maximum number of designs."""

    def __init__(
        self,
        message: str = "Maximum number of designs reached",
        max_designs: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if max_designs is not None:
            context["max_designs"] = max_designs
        super().__init__(message, code="DESIGN_LIMIT", context=context, **kwargs)


# ============================================
# Storage Errors
# ============================================


class StorageError(AppException):
    """Base exception for snapshot storage errors."""

    pass


class QuotaExceededError(StorageError):
    """
    Raised by a key-value store when a write would exceed its quota.

    Example:
        >>> raise QuotaExceededError(key="customizationData", quota_bytes=5242880)
    """

    def __init__(
        self,
        message: str = "Storage quota exceeded",
        key: Optional[str] = None,
        quota_bytes: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if key:
            context["key"] = key
        if quota_bytes is not None:
            context["quota_bytes"] = quota_bytes
        super().__init__(message, code="QUOTA_EXCEEDED", context=context, **kwargs)


class SnapshotTooLargeError(StorageError):
    """Raised when a serialized session exceeds the snapshot byte budget."""

    def __init__(
        self,
        message: str = "Snapshot exceeds byte budget",
        size_bytes: Optional[int] = None,
        max_bytes: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if size_bytes is not None:
            context["size_bytes"] = size_bytes
        if max_bytes is not None:
            context["max_bytes"] = max_bytes
        super().__init__(message, code="SNAPSHOT_TOO_LARGE", context=context, **kwargs)


# Alias for common import pattern
StitchQuoteError = AppException
