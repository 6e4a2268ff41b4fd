"""
Address Search Service - forward geocoding through the Nominatim search API.
"""

import logging
import httpx
from typing import List, Optional

from skatespot.config.settings import GeocodingSettings
from skatespot.core.exceptions import GeocodingError
from skatespot.schemas.spot import AddressResult

logger = logging.getLogger(__name__)


class AddressSearchService:
    """Turns a free-text address into candidate map positions."""

    def __init__(
        self,
        settings: Optional[GeocodingSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or GeocodingSettings()
        self.base_url = self.settings.base_url.rstrip("/")
        self.timeout = self.settings.timeout_seconds
        self.limit = self.settings.result_limit
        self.min_query_length = self.settings.min_query_length
        self._transport = transport

    def _get_headers(self) -> dict:
        # Nominatim's usage policy requires an identifying User-Agent
        headers = {"User-Agent": self.settings.user_agent}
        if self.settings.accept_language:
            headers["Accept-Language"] = self.settings.accept_language
        return headers

    async def search(self, query: str) -> List[AddressResult]:
        """
        Search for places matching an address.

        Args:
            query: Free-text address (e.g., "Rua Augusta, São Paulo")

        Returns:
            Up to ``result_limit`` results; empty for queries that are too short

        Raises:
            GeocodingError: If the provider cannot be reached or answers with an error
        """
        query = query.strip()
        if len(query) < self.min_query_length:
            return []

        params = {
            "format": "json",
            "q": query,
            "limit": self.limit,
            "addressdetails": 1,
        }

        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"{self.base_url}/search", params=params)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout searching address '{query}'")
            raise GeocodingError("Address search timed out", {"query": query}) from e
        except httpx.HTTPError as e:
            logger.error(f"Error searching address '{query}': {e}")
            raise GeocodingError("Address search provider unreachable", {"query": query}) from e

        if response.status_code != 200:
            logger.warning(f"Address search returned {response.status_code} for '{query}'")
            raise GeocodingError(
                f"Address search provider returned {response.status_code}",
                {"query": query, "status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise GeocodingError("Address search returned invalid JSON", {"query": query}) from e

        results = []
        for item in payload if isinstance(payload, list) else []:
            try:
                results.append(
                    AddressResult(
                        display_name=item.get("display_name", ""),
                        lat=float(item["lat"]),
                        lng=float(item["lon"]),
                    )
                )
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.debug(f"Skipping malformed address result: {item!r}")

        logger.info(f"Found {len(results)} addresses for '{query}'")
        return results
