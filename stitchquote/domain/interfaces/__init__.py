# Domain Interfaces Package
"""
Abstract base classes defining contracts for infrastructure implementations.
"""

from .key_value_store_interface import KeyValueStoreInterface
from .option_source_interface import OptionSourceInterface

__all__ = ["KeyValueStoreInterface", "OptionSourceInterface"]
