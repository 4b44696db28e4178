"""HTTP option source backed by the storefront's REST API."""

import asyncio
from typing import Any, Optional

import aiohttp

from stitchquote.domain.interfaces import OptionSourceInterface
from stitchquote.utils import get_logger
from stitchquote.utils.exceptions import CatalogUnavailableError

logger = get_logger(__name__)


class HttpOptionSource(OptionSourceInterface):
    """
    Fetches embroidery option records over HTTP.

    Issues ``GET {base_url}/embroidery-options?isActive=true`` and accepts
    either a bare JSON list or a ``{"data": [...]}`` envelope.
    """

    ENDPOINT = "embroidery-options"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the source.

        Args:
            base_url: API root, e.g. ``http://localhost:5000/api``
            timeout: Total request timeout in seconds
            session: Shared aiohttp session (default: one per fetch)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.ENDPOINT}"

    async def fetch(self, active_only: bool = True) -> list[dict[str, Any]]:
        """Fetch raw option records.

        Raises:
            CatalogUnavailableError: On connection errors, timeouts,
                non-200 responses or a payload that is not a record list
        """
        params = {"isActive": "true"} if active_only else {}
        logger.debug(f"Fetching embroidery options from {self.url}")

        try:
            if self._session is not None:
                payload = await self._get_json(self._session, params)
            else:
                async with aiohttp.ClientSession() as session:
                    payload = await self._get_json(session, params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise CatalogUnavailableError(f"Option request failed: {e}", url=self.url) from e

        records = self._extract_records(payload)
        logger.info(f"Fetched {len(records)} option records")
        return records

    async def _get_json(self, session: aiohttp.ClientSession, params: dict[str, str]) -> Any:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with session.get(self.url, params=params, timeout=timeout) as response:
            if response.status != 200:
                raise CatalogUnavailableError(
                    f"HTTP {response.status}",
                    url=self.url,
                    status_code=response.status,
                )
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise CatalogUnavailableError(f"Invalid JSON response: {e}", url=self.url) from e

    def _extract_records(self, payload: Any) -> list[dict[str, Any]]:
        if isinstance(payload, dict):
            payload = payload.get("data")
        if not isinstance(payload, list):
            raise CatalogUnavailableError("Unexpected option payload shape", url=self.url)
        return payload
