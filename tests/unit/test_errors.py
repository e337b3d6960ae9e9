"""Unit tests for the SiteVerifyError hierarchy."""

import pytest

from siteverify.errors import (
    DecodeError,
    SiteVerifyError,
    TransportError,
    ValidationError,
    VerificationError,
)
from siteverify.schemas.codes import Code, UnknownCode


class TestErrorSubclasses:
    def test_validation_error(self):
        e = ValidationError("bad input", codes={Code.MISSING_SECRET}, field="secret")
        assert e.error_code == "validation_error"
        assert e.message == "bad input"
        assert e.codes == frozenset({Code.MISSING_SECRET})

    def test_transport_error(self):
        e = TransportError("boom", status_code=502)
        assert e.error_code == "transport_error"
        assert e.status_code == 502

    def test_transport_error_status_optional(self):
        assert TransportError("timeout").status_code is None

    def test_decode_error(self):
        assert DecodeError("not json").error_code == "decode_error"

    def test_verification_error(self):
        e = VerificationError({Code.MISSING_RESPONSE, UnknownCode("foo")})
        assert e.error_code == "verification_failed"
        assert e.codes == frozenset({Code.MISSING_RESPONSE, UnknownCode("foo")})

    def test_verification_error_requires_codes(self):
        with pytest.raises(ValueError):
            VerificationError(set())

    def test_verification_message_lists_descriptions(self):
        e = VerificationError({Code.MISSING_SECRET, Code.MISSING_RESPONSE})
        assert Code.MISSING_SECRET.description in e.message
        assert Code.MISSING_RESPONSE.description in e.message

    @pytest.mark.parametrize(
        "exc",
        [
            ValidationError("x", codes={Code.MISSING_SECRET}),
            TransportError("x"),
            DecodeError("x"),
            VerificationError({Code.BAD_REQUEST}),
        ],
        ids=["validation", "transport", "decode", "verification"],
    )
    def test_all_inherit_from_base(self, exc):
        assert isinstance(exc, SiteVerifyError)

    def test_verification_is_not_transport_or_decode(self):
        e = VerificationError({Code.BAD_REQUEST})
        assert not isinstance(e, (TransportError, DecodeError, ValidationError))


class TestToDict:
    def test_basic(self):
        e = DecodeError("not json")
        assert e.to_dict() == {"error": "not json", "code": "decode_error"}

    @pytest.mark.parametrize(
        "kwargs, key, value",
        [
            ({"field": "secret"}, "field", "secret"),
            ({"details": {"line": 1}}, "details", {"line": 1}),
        ],
        ids=["with_field", "with_details"],
    )
    def test_optional_key_present(self, kwargs, key, value):
        e = SiteVerifyError("oops", **kwargs)
        assert e.to_dict()[key] == value

    def test_no_optional_keys_when_absent(self):
        d = SiteVerifyError("missing").to_dict()
        assert "field" not in d
        assert "details" not in d

    def test_codes_rendered_as_sorted_wire_strings(self):
        e = VerificationError({UnknownCode("foo"), Code.MISSING_SECRET})
        assert e.to_dict()["codes"] == ["foo", "missing-input-secret"]

    def test_validation_error_includes_codes_and_field(self):
        d = ValidationError("missing", codes={Code.MISSING_SECRET}, field="secret").to_dict()
        assert d["codes"] == ["missing-input-secret"]
        assert d["field"] == "secret"
