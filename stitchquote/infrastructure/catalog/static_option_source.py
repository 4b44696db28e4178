"""In-process option source serving a fixed list of records."""

import copy
from typing import Any, Iterable, Optional

from stitchquote.domain.interfaces import OptionSourceInterface
from stitchquote.utils import parse_flag
from stitchquote.utils.exceptions import CatalogUnavailableError


class StaticOptionSource(OptionSourceInterface):
    """Serves raw option records from memory, e.g. fixtures or a YAML dump."""

    def __init__(self, records: Iterable[dict[str, Any]], error: Optional[Exception] = None):
        """
        Args:
            records: Raw option records
            error: If set, every fetch fails with this error
        """
        self.records = list(records)
        self.error = error
        self.fetch_count = 0

    async def fetch(self, active_only: bool = True) -> list[dict[str, Any]]:
        self.fetch_count += 1
        if self.error is not None:
            raise CatalogUnavailableError(str(self.error)) from self.error

        records = copy.deepcopy(self.records)
        if active_only:
            records = [
                r for r in records
                if not isinstance(r, dict) or parse_flag(r.get("isActive"), default=True)
            ]
        return records
