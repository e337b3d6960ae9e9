"""
Error hierarchy for siteverify.

SiteVerifyError is the base for all typed errors. Callers branch on the
subclass:

- ValidationError    — local precondition failed, nothing was sent
- TransportError     — the network call itself failed (or returned non-2xx)
- DecodeError        — the reply was not the expected JSON shape
- VerificationError  — the service answered and rejected the token

Only VerificationError means "the user must retry the captcha"; the other
three mean the integration is broken.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from siteverify.schemas.codes import ErrorCode, to_wire


class SiteVerifyError(Exception):
    """Base error. All typed errors inherit from this."""

    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class _CodesMixin:
    codes: frozenset[ErrorCode]

    def to_dict(self) -> dict:
        payload = super().to_dict()  # type: ignore[misc]
        payload["codes"] = to_wire(self.codes)
        return payload


class ValidationError(_CodesMixin, SiteVerifyError):
    error_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        codes: Iterable[ErrorCode],
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message, field=field, details=details)
        self.codes = frozenset(codes)


class TransportError(SiteVerifyError):
    error_code = "transport_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class DecodeError(SiteVerifyError):
    error_code = "decode_error"


class VerificationError(_CodesMixin, SiteVerifyError):
    error_code = "verification_failed"

    def __init__(self, codes: Iterable[ErrorCode]) -> None:
        codes = frozenset(codes)
        if not codes:
            raise ValueError("VerificationError requires at least one error code")
        message = "; ".join(
            code.description for code in sorted(codes, key=lambda c: c.value)
        )
        super().__init__(message)
        self.codes = codes
