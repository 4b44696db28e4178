"""Embroidery option catalog and its built-in defaults."""

from .defaults import DEFAULT_OPTION_RECORDS
from .option_catalog import (
    DEFAULT_OPTIONS,
    OptionCatalog,
    normalize_option,
    normalize_records,
    parse_incompatible_ids,
    parse_option_price,
)

__all__ = [
    "DEFAULT_OPTION_RECORDS",
    "DEFAULT_OPTIONS",
    "OptionCatalog",
    "normalize_option",
    "normalize_records",
    "parse_incompatible_ids",
    "parse_option_price",
]
