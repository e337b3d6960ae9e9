from ipaddress import IPv4Address
from urllib.parse import parse_qs

import httpx
import pytest

from siteverify import (
    VERIFY_URL,
    Code,
    HCaptchaClient,
    HttpClient,
    Secret,
    VerificationError,
    VerificationRequest,
)


def _siteverify(request: httpx.Request) -> httpx.Response:
    """Stand-in for the hCaptcha endpoint: reports whichever inputs are empty."""
    assert str(request.url) == VERIFY_URL
    form = {k: v[0] for k, v in parse_qs(request.content.decode(), keep_blank_values=True).items()}
    codes = []
    if not form.get("secret"):
        codes.append("missing-input-secret")
    if not form.get("response"):
        codes.append("missing-input-response")
    if codes:
        return httpx.Response(200, json={"success": False, "error-codes": codes})
    return httpx.Response(
        200,
        json={"success": True, "challenge_ts": "2020-11-11T23:27:00Z", "hostname": "my-host.ie"},
    )


@pytest.fixture
async def client():
    async with HCaptchaClient(HttpClient(transport=httpx.MockTransport(_siteverify))) as c:
        yield c


def _unchecked_request() -> VerificationRequest:
    # Skips Secret.parse so the empty secret reaches the service.
    return VerificationRequest(secret=Secret.model_construct(value=""), response="")


async def test_invalid_secret_missing_response(client):
    with pytest.raises(VerificationError) as exc_info:
        await client.verify_client_response(_unchecked_request())
    assert Code.MISSING_SECRET in exc_info.value.codes
    assert Code.MISSING_RESPONSE in exc_info.value.codes


async def test_invalid_secret_missing_response_with_ip(client):
    request = _unchecked_request().with_user_ip(IPv4Address("18.197.23.227"))
    with pytest.raises(VerificationError) as exc_info:
        await client.verify_client_response(request)
    assert exc_info.value.codes == {Code.MISSING_SECRET, Code.MISSING_RESPONSE}


async def test_invalid_secret_missing_response_with_site_key(client):
    request = _unchecked_request().with_site_key("10000000-ffff-ffff-ffff-000000000001")
    with pytest.raises(VerificationError) as exc_info:
        await client.verify_client_response(request)
    assert exc_info.value.codes == {Code.MISSING_SECRET, Code.MISSING_RESPONSE}


async def test_valid_request_succeeds(client):
    request = VerificationRequest.build("0x0000000000000000000000000000000000000000", "token")
    response = await client.verify_client_response(request)
    assert response.success is True
    assert response.hostname == "my-host.ie"
    assert response.error_codes is None
