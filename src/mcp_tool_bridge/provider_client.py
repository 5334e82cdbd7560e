"""Async HTTP client for the upstream data providers."""

from dataclasses import dataclass
from typing import Optional

import httpx

from .errors import HandlerError


@dataclass
class ProviderResponse:
    """Raw response from an upstream provider."""
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ProviderClient:
    """Issues single GET requests to upstream providers. No retries, no timeout."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize provider client.

        Args:
            transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self.transport = transport

    async def get(self, url: str, label: str) -> ProviderResponse:
        """
        Fetch a URL once.

        Args:
            url: Absolute URL to fetch
            label: Provider name used in error messages (e.g. "Weather API")

        Returns:
            ProviderResponse with status and body text

        Raises:
            HandlerError if the request could not be completed at all
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=None) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                raise HandlerError(f"{label} request failed: {e}") from e
        return ProviderResponse(status_code=response.status_code, text=response.text)
