"""Transport protocol — the orchestrator depends on this, not on httpx."""

from typing import Mapping, Protocol


class Transport(Protocol):
    async def post_form(self, url: str, data: Mapping[str, str]) -> bytes:
        """POST ``data`` form-encoded to ``url`` and return the raw body.

        Raises TransportError on network failure or a non-2xx status.
        """
        ...
