"""hCaptcha siteverify orchestration.

verify() sends one request through a Transport and turns the reply into
either a VerificationResponse or one of the typed errors. HCaptchaClient
binds a transport, endpoint and configured secret for repeated use.
"""

from __future__ import annotations

from ipaddress import ip_address
from typing import Any, Optional, Union

from siteverify.config import VERIFY_URL, HCaptchaSettings
from siteverify.errors import (
    DecodeError,
    TransportError,
    ValidationError,
    VerificationError,
)
from siteverify.infrastructure.captcha.protocol import Transport
from siteverify.infrastructure.http_client import HttpClient
from siteverify.schemas.codes import Code, to_wire
from siteverify.schemas.request import IPAddress, VerificationRequest
from siteverify.schemas.response import VerificationResponse
from siteverify.shared.logging import get_logger

log = get_logger(__name__)


async def verify(
    request: VerificationRequest,
    transport: Transport,
    *,
    url: str = VERIFY_URL,
) -> VerificationResponse:
    """Verify ``request`` against siteverify with exactly one POST.

    Raises:
        TransportError: the POST failed or returned non-2xx
        DecodeError: the body was not a siteverify JSON object
        VerificationError: the service rejected the token
    """
    payload = request.to_form_payload()
    log.debug(
        "hcaptcha_request_sent",
        url=url,
        optional_fields=sorted(payload.keys() - {"secret", "response"}),
    )

    try:
        body = await transport.post_form(url, payload)
    except TransportError as e:
        log.error(
            "hcaptcha_transport_error",
            url=url,
            error=e.message,
            status_code=e.status_code,
        )
        raise

    try:
        response = VerificationResponse.decode(body)
    except DecodeError as e:
        log.error(
            "hcaptcha_decode_failed",
            error=e.message,
            body_preview=body[:200].decode("utf-8", errors="replace"),
        )
        raise

    outcome = response.to_outcome()
    if outcome is not response:
        log.warning(
            "hcaptcha_verification_failed",
            error_codes=to_wire(outcome),
            hostname=response.hostname,
        )
        raise VerificationError(outcome)

    log.debug(
        "hcaptcha_verification_succeeded",
        hostname=response.hostname,
        challenge_ts=response.challenge_ts,
    )
    return response


class HCaptchaClient:
    def __init__(
        self,
        transport: Transport,
        *,
        url: str = VERIFY_URL,
        secret: str = "",
        site_key: Optional[str] = None,
        owns_transport: bool = True,
    ) -> None:
        self._transport = transport
        self._owns_transport = owns_transport
        self._url = url
        self._secret = secret
        self._site_key = site_key

    @classmethod
    def from_settings(
        cls,
        settings: Optional[HCaptchaSettings] = None,
        transport: Optional[Transport] = None,
    ) -> "HCaptchaClient":
        settings = settings or HCaptchaSettings()
        if not settings.hcaptcha_secret.strip():
            log.warning("hcaptcha_secret_not_configured")
        if transport is None:
            transport = HttpClient(timeout=settings.hcaptcha_timeout_seconds)
        return cls(
            transport,
            url=settings.hcaptcha_verify_url,
            secret=settings.hcaptcha_secret,
            site_key=settings.hcaptcha_site_key,
        )

    @property
    def url(self) -> str:
        return self._url

    def with_url(self, url: str) -> "HCaptchaClient":
        """Same transport and credentials, different endpoint.

        The copy borrows the transport: closing it leaves the transport open,
        and closing this client still closes it.
        """
        return HCaptchaClient(
            self._transport,
            url=url,
            secret=self._secret,
            site_key=self._site_key,
            owns_transport=False,
        )

    async def verify_client_response(
        self, request: VerificationRequest
    ) -> VerificationResponse:
        return await verify(request, self._transport, url=self._url)

    async def verify_token(
        self,
        response: str,
        *,
        user_ip: Union[IPAddress, str, None] = None,
        site_key: Optional[str] = None,
    ) -> VerificationResponse:
        """Build a request from the configured secret and verify ``response``."""
        request = VerificationRequest.build(self._secret, response)

        if isinstance(user_ip, str):
            try:
                user_ip = ip_address(user_ip)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid user IP address: {user_ip!r}",
                    codes={Code.INVALID_REMOTE_IP},
                    field="user_ip",
                ) from e
        if user_ip is not None:
            request = request.with_user_ip(user_ip)

        site_key = site_key if site_key is not None else self._site_key
        if site_key is not None:
            request = request.with_site_key(site_key)

        return await self.verify_client_response(request)

    async def aclose(self) -> None:
        if not self._owns_transport:
            return
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "HCaptchaClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
