"""
Input validation utilities.
"""

import math
import re
from typing import Any, Optional
from urllib.parse import urlparse

from .exceptions import InvalidDesignFileError, InvalidDimensionsError

# Leading decimal number of a price string
LEADING_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


def validate_url(url: str) -> bool:
    """
    Validate that a string is a valid URL.

    Args:
        url: URL string to validate.

    Returns:
        True if valid URL, False otherwise.
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except (ValueError, AttributeError):
        return False


def parse_price(price: Any) -> float:
    """
    Validate and convert price to float.

    Accepts numbers and strings starting with a number, such as "14.50",
    "$14.50", "14,50 €" or "14.50 USD". Text after the leading number is
    ignored.

    Args:
        price: Price value (string or number).

    Returns:
        Price as float.

    Raises:
        ValueError: If price is invalid, not finite or negative.
    """
    if isinstance(price, bool):
        raise ValueError(f"Invalid price value: {price}")

    try:
        if isinstance(price, str):
            # Remove currency symbols and spaces
            cleaned = re.sub(r"[€$£\s]", "", price)
            # Comma as decimal separator when there is no dot
            if "," in cleaned and "." not in cleaned:
                cleaned = cleaned.replace(",", ".")
            match = LEADING_NUMBER.match(cleaned)
            if match is None:
                raise ValueError(f"Invalid price value: {price}")
            price_float = float(match.group())
        else:
            price_float = float(price)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid price value: {price}") from e

    if not math.isfinite(price_float):
        raise ValueError(f"Price must be finite: {price}")
    if price_float < 0:
        raise ValueError("Price cannot be negative")

    return price_float


def parse_flag(value: Any, default: bool = False) -> bool:
    """
    Read a boolean record field.

    Strings count as true only for "true", "1" or "yes"; None gives
    ``default``.
    """
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def validate_dimensions(width: Any, height: Any) -> tuple[float, float]:
    """
    Validate patch dimensions.

    Args:
        width: Patch width.
        height: Patch height, same unit as width.

    Returns:
        (width, height) as floats.

    Raises:
        InvalidDimensionsError: If either value is missing, not a number,
            not finite or not strictly positive.
    """
    try:
        w = float(width)
        h = float(height)
    except (TypeError, ValueError) as e:
        raise InvalidDimensionsError(width=width, height=height) from e

    if not (math.isfinite(w) and math.isfinite(h)) or w <= 0 or h <= 0:
        raise InvalidDimensionsError(width=width, height=height)

    return w, h


def validate_design_file(
    filename: str,
    size: int,
    mime_type: Optional[str],
    max_bytes: int = 10 * 1024 * 1024,
    mime_prefix: str = "image/",
) -> None:
    """
    Validate an uploaded design file before it enters a session.

    Args:
        filename: Declared file name.
        size: Declared size in bytes.
        mime_type: Declared MIME type.
        max_bytes: Maximum accepted size.
        mime_prefix: Required MIME type prefix.

    Raises:
        InvalidDesignFileError: With a user-facing message if the file is
            rejected.
    """
    if not filename or not filename.strip():
        raise InvalidDesignFileError("Please choose a file to upload", reason="missing_name")

    if not mime_type or not mime_type.lower().startswith(mime_prefix):
        raise InvalidDesignFileError(
            "Please upload an image file",
            filename=filename,
            reason="unsupported_type",
            context={"mime_type": mime_type},
        )

    if size < 0:
        raise InvalidDesignFileError("File size is invalid", filename=filename, reason="bad_size")

    if size > max_bytes:
        max_mb = max_bytes / (1024 * 1024)
        raise InvalidDesignFileError(
            f"File size must be less than {max_mb:g}MB",
            filename=filename,
            reason="too_large",
            context={"size": size, "max_bytes": max_bytes},
        )

