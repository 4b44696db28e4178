"""Option source implementations."""

from .http_option_source import HttpOptionSource
from .static_option_source import StaticOptionSource

__all__ = ["HttpOptionSource", "StaticOptionSource"]
