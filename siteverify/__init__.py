"""
siteverify — typed hCaptcha response verification.

    async with HCaptchaClient(HttpClient()) as client:
        request = VerificationRequest.build(secret, token)
        response = await client.verify_client_response(request)

verify() raises ValidationError, TransportError, DecodeError or
VerificationError; only the last one means the user's captcha was rejected.
"""

from siteverify.config import VERIFY_URL, HCaptchaSettings, LoggingSettings, Settings
from siteverify.errors import (
    DecodeError,
    SiteVerifyError,
    TransportError,
    ValidationError,
    VerificationError,
)
from siteverify.infrastructure.captcha.hcaptcha import HCaptchaClient, verify
from siteverify.infrastructure.captcha.protocol import Transport
from siteverify.infrastructure.http_client import HttpClient
from siteverify.schemas.codes import (
    NO_ERROR_CODES,
    Code,
    ErrorCode,
    UnknownCode,
    codes_from_wire,
    from_wire_string,
)
from siteverify.schemas.request import Secret, VerificationRequest
from siteverify.schemas.response import VerificationResponse

__all__ = [
    "VERIFY_URL",
    "HCaptchaSettings",
    "LoggingSettings",
    "Settings",
    "DecodeError",
    "SiteVerifyError",
    "TransportError",
    "ValidationError",
    "VerificationError",
    "HCaptchaClient",
    "verify",
    "Transport",
    "HttpClient",
    "NO_ERROR_CODES",
    "Code",
    "ErrorCode",
    "UnknownCode",
    "codes_from_wire",
    "from_wire_string",
    "Secret",
    "VerificationRequest",
    "VerificationResponse",
]
