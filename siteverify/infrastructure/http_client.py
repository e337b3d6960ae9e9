"""Shared async HTTP client with configurable timeout."""

from typing import Any, Mapping, Optional

import httpx

from siteverify.errors import TransportError


class HttpClient:
    """Thin async wrapper around httpx.AsyncClient with a configurable timeout.

    post_form() is the Transport used by the verify orchestrator: it returns
    the raw body of a 2xx reply and turns everything else into TransportError.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(url, **kwargs)

    async def post_form(self, url: str, data: Mapping[str, str]) -> bytes:
        try:
            response = await self.post(url, data=dict(data))
        except httpx.HTTPError as e:
            raise TransportError(
                f"POST {url} failed: {type(e).__name__}",
                details={"error": str(e)},
            ) from e

        if not response.is_success:
            raise TransportError(
                f"POST {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                details={"response_text": response.text[:200]},
            )
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
