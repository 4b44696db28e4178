"""Unit tests for the exception hierarchy."""

import pytest

from stitchquote.utils.exceptions import (
    AppException,
    CatalogError,
    CatalogUnavailableError,
    CategoryArityError,
    ConfigError,
    ConfigurationError,
    DesignLimitError,
    DesignNotFoundError,
    IncompatibleOptionError,
    InvalidDesignFileError,
    InvalidDimensionsError,
    InvalidInputError,
    QuotaExceededError,
    SelectionError,
    SessionError,
    SnapshotTooLargeError,
    StitchQuoteError,
    StorageError,
    ValidationError,
)


class TestAppException:
    """Test the base exception."""

    def test_default_code_from_class_name(self):
        """Test the code is derived from the class name."""
        assert AppException("boom").code == "APP_EXCEPTION"

    def test_str_includes_code(self):
        """Test string form."""
        assert str(AppException("boom", code="E1")) == "[E1] boom"

    def test_to_dict(self):
        """Test dictionary form for logging."""
        error = DesignNotFoundError(design_id="design_1")
        assert error.to_dict() == {
            "error_type": "DesignNotFoundError",
            "message": "Design not found",
            "code": "DESIGN_NOT_FOUND",
            "context": {"design_id": "design_1"},
        }

    def test_alias(self):
        """Test the package-level alias."""
        assert StitchQuoteError is AppException


class TestHierarchy:
    """Test exception families."""

    @pytest.mark.parametrize("error, family", [
        (ConfigurationError(), ConfigError),
        (CatalogUnavailableError(), CatalogError),
        (InvalidInputError(), ValidationError),
        (InvalidDesignFileError(), ValidationError),
        (InvalidDimensionsError(), ValidationError),
        (CategoryArityError(), SelectionError),
        (IncompatibleOptionError(), SelectionError),
        (DesignNotFoundError(), SessionError),
        (DesignLimitError(), SessionError),
        (QuotaExceededError(), StorageError),
        (SnapshotTooLargeError(), StorageError),
    ])
    def test_family(self, error, family):
        """Test every error belongs to its family and the base."""
        assert isinstance(error, family)
        assert isinstance(error, AppException)

    def test_context_fields(self):
        """Test constructor arguments land in the context."""
        error = CatalogUnavailableError(url="http://localhost:5000/api/embroidery-options", status_code=503)
        assert error.context == {"url": "http://localhost:5000/api/embroidery-options", "status_code": 503}

        error = IncompatibleOptionError(option_id="border-merrowed", conflicting_ids=["border-embroidered"])
        assert error.context["conflicting_ids"] == ["border-embroidered"]

    def test_long_values_truncated(self):
        """Test offending input is truncated in the context."""
        error = InvalidInputError(field="quantity", value="9" * 500)
        assert len(error.context["value"]) == 100
