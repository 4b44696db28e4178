"""
Abstract interface for external embroidery option sources.
"""

from abc import ABC, abstractmethod
from typing import Any


class OptionSourceInterface(ABC):
    """
    Abstract base class for option sources.

    A source returns raw option records as the storefront API serves them
    (camelCase keys, prices possibly as strings, incompatibility lists as
    JSON strings). Normalization is the catalog's job.
    """

    @abstractmethod
    async def fetch(self, active_only: bool = True) -> list[dict[str, Any]]:
        """
        Fetch raw option records.

        Args:
            active_only: Only return records flagged active.

        Returns:
            List of raw option records.

        Raises:
            CatalogUnavailableError: If the source cannot be reached or
                returns an unusable payload.
        """
        pass
