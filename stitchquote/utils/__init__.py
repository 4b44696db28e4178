"""Utility modules for configuration, logging, validation and file handling."""

from .config import AppConfig, get_config, load_config, reset_config
from .logger import (
    get_logger,
    log_execution_time,
    set_package_log_level,
    log_exception,
)
from .file_utils import data_url_size, encode_preview, format_file_size
from .validators import (
    parse_flag,
    parse_price,
    validate_design_file,
    validate_dimensions,
    validate_url,
)

__all__ = [
    # Configuration
    "AppConfig",
    "get_config",
    "load_config",
    "reset_config",
    # Logging
    "get_logger",
    "log_execution_time",
    "set_package_log_level",
    "log_exception",
    # Files
    "encode_preview",
    "data_url_size",
    "format_file_size",
    # Validation
    "parse_flag",
    "parse_price",
    "validate_design_file",
    "validate_dimensions",
    "validate_url",
]
