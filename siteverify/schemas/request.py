"""
Outbound request models.

Secret               — validated credential wrapper (non-blank only)
VerificationRequest  — secret + response token + optional remote IP/site key

Only the secret is checked locally. A missing response token is a normal
runtime condition that the service reports as missing-input-response.
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from siteverify.errors import ValidationError
from siteverify.schemas.codes import Code
from siteverify.shared.logging import get_logger

log = get_logger(__name__)

IPAddress = Union[IPv4Address, IPv6Address]


class Secret(BaseModel):
    """The siteverify secret.

    Build it with ``Secret.parse``. Length and prefix are deliberately not
    checked: legacy ``0x...`` secrets and newer ``ES_...`` secrets are both
    accepted. Blank values are rejected on every validated construction
    path; only ``model_construct`` skips the check.
    """

    model_config = ConfigDict(frozen=True)

    value: str

    @field_validator("value")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        # Not a ValueError, so pydantic re-raises it unchanged
        if not value.strip():
            log.debug("secret_missing")
            raise ValidationError(
                "Secret string is missing",
                codes={Code.MISSING_SECRET},
                field="secret",
            )
        return value

    @classmethod
    def parse(cls, raw: str) -> "Secret":
        """Wrap ``raw`` unchanged, or raise ValidationError if it is blank."""
        return cls(value=raw)

    def __str__(self) -> str:
        return self.value


class VerificationRequest(BaseModel):
    """Data sent to siteverify for one verification call."""

    model_config = ConfigDict(frozen=True)

    secret: Secret
    response: str
    user_ip: Optional[str] = None
    site_key: Optional[str] = None

    @classmethod
    def build(cls, secret: str, response: str) -> "VerificationRequest":
        """Parse a raw secret and pair it with the client's response token."""
        return cls(secret=Secret.parse(secret), response=response)

    def with_user_ip(self, ip: IPAddress) -> "VerificationRequest":
        # Callers parse text with ipaddress.ip_address(); malformed input
        # fails there, before it reaches the request.
        if not isinstance(ip, (IPv4Address, IPv6Address)):
            raise TypeError(
                f"user_ip must be an IPv4Address or IPv6Address, got {type(ip).__name__}"
            )
        return self.model_copy(update={"user_ip": str(ip)})

    def with_site_key(self, site_key: str) -> "VerificationRequest":
        return self.model_copy(update={"site_key": site_key})

    def to_form_payload(self) -> dict[str, str]:
        """Form fields in the order siteverify documents them."""
        payload = {"secret": str(self.secret), "response": self.response}
        if self.user_ip is not None:
            payload["remoteip"] = self.user_ip
        if self.site_key is not None:
            payload["sitekey"] = self.site_key
        return payload
