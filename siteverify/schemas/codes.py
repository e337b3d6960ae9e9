"""
Error-code taxonomy for the hCaptcha siteverify API.

Code         — the documented wire tokens, one member per token
UnknownCode  — catch-all carrying any token the library does not recognise
ErrorCode    — Union of the two; what response decoding produces

Enum members compare by identity and UnknownCode compares by its wire value,
so decoded codes deduplicate correctly inside sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class Code(Enum):
    """Documented siteverify error tokens."""

    MISSING_SECRET = "missing-input-secret"
    INVALID_SECRET = "invalid-input-secret"
    MISSING_RESPONSE = "missing-input-response"
    INVALID_RESPONSE = "invalid-input-response"
    EXPIRED_RESPONSE = "expired-input-response"
    ALREADY_SEEN_RESPONSE = "already-seen-response"
    BAD_REQUEST = "bad-request"
    MISSING_REMOTE_IP = "missing-remoteip"
    INVALID_REMOTE_IP = "invalid-remoteip"
    NOT_USING_DUMMY_PASSCODE = "not-using-dummy-passcode"
    SITEKEY_SECRET_MISMATCH = "sitekey-secret-mismatch"
    INVALID_OR_ALREADY_SEEN_RESPONSE = "invalid-or-already-seen-response"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.value


_DESCRIPTIONS: dict[Code, str] = {
    Code.MISSING_SECRET: "Your secret key is missing.",
    Code.INVALID_SECRET: "Your secret key is invalid or malformed.",
    Code.MISSING_RESPONSE: "The response parameter (verification token) is missing.",
    Code.INVALID_RESPONSE: "The response parameter (verification token) is invalid or malformed.",
    Code.EXPIRED_RESPONSE: "The response parameter (verification token) has expired.",
    Code.ALREADY_SEEN_RESPONSE: "The response parameter (verification token) was already verified once.",
    Code.BAD_REQUEST: "The request is invalid or malformed.",
    Code.MISSING_REMOTE_IP: "The remoteip parameter is missing.",
    Code.INVALID_REMOTE_IP: "The remoteip parameter is not a valid IP address or blinded value.",
    Code.NOT_USING_DUMMY_PASSCODE: "You have used a testing sitekey but have not used its matching secret.",
    Code.SITEKEY_SECRET_MISMATCH: "The sitekey is not registered with the provided secret.",
    Code.INVALID_OR_ALREADY_SEEN_RESPONSE: "The response parameter has already been checked, or has another issue.",
}


@dataclass(frozen=True)
class UnknownCode:
    """A token outside the documented vocabulary, kept verbatim."""

    value: str

    @property
    def description(self) -> str:
        return f"Unknown error: {self.value}"

    def __str__(self) -> str:
        return self.value


ErrorCode = Union[Code, UnknownCode]

# Synthesized when the service reports failure without any error-codes.
NO_ERROR_CODES = UnknownCode("No error codes returned")


def from_wire_string(value: str) -> ErrorCode:
    """Map a wire token to its ErrorCode. Never raises."""
    try:
        return Code(value)
    except ValueError:
        return UnknownCode(value)


def codes_from_wire(values: Iterable[str]) -> frozenset[ErrorCode]:
    return frozenset(from_wire_string(v) for v in values)


def to_wire(codes: Iterable[ErrorCode]) -> list[str]:
    """Sorted wire tokens, for logs and error payloads."""
    return sorted(code.value for code in codes)
