"""
Decoded siteverify reply.

VerificationResponse.decode() turns the raw JSON body into a frozen model.
Wire error tokens are translated into the ErrorCode taxonomy during decode,
so ``error_codes`` never holds bare strings.

to_outcome() is the single place that decides success vs failure:

    success=true                       -> the response itself
    success=false, error-codes present -> those codes
    success=false, no error-codes      -> {NO_ERROR_CODES}
"""

from __future__ import annotations

from typing import Annotated, Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    StrictBool,
    StrictFloat,
)
from pydantic import ValidationError as PydanticValidationError

from siteverify.errors import DecodeError, VerificationError
from siteverify.schemas.codes import (
    NO_ERROR_CODES,
    Code,
    ErrorCode,
    UnknownCode,
    from_wire_string,
    to_wire,
)


def _parse_error_codes(value: Any) -> frozenset[ErrorCode]:
    if isinstance(value, (str, bytes)) or not isinstance(
        value, (list, tuple, set, frozenset)
    ):
        raise ValueError("error-codes must be an array of strings")

    codes: set[ErrorCode] = set()
    for item in value:
        if isinstance(item, (Code, UnknownCode)):
            codes.add(item)
        elif isinstance(item, str):
            codes.add(from_wire_string(item))
        else:
            raise ValueError(f"error-codes entries must be strings, got {item!r}")
    return frozenset(codes)


ErrorCodeSet = Annotated[
    frozenset,
    PlainValidator(_parse_error_codes),
    PlainSerializer(to_wire, return_type=list),
]


class VerificationResponse(BaseModel):
    """Result of a siteverify call.

    ``score`` and ``score_reason`` are only sent on the Enterprise tier and
    are None otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    success: StrictBool
    challenge_ts: Optional[str] = None  # yyyy-MM-dd'T'HH:mm:ssZZ
    hostname: Optional[str] = None
    credit: Optional[StrictBool] = None
    error_codes: Optional[ErrorCodeSet] = Field(default=None, alias="error-codes")
    score: Optional[StrictFloat] = None
    score_reason: Optional[frozenset[str]] = None

    @classmethod
    def decode(cls, raw: Union[bytes, str]) -> "VerificationResponse":
        """Decode a raw JSON body. Raises DecodeError on a malformed reply."""
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError as e:
            raise DecodeError(
                "Malformed siteverify response",
                details=e.errors(
                    include_url=False, include_context=False, include_input=False
                ),
            ) from e

    @property
    def timestamp(self) -> Optional[str]:
        return self.challenge_ts

    def to_outcome(self) -> Union["VerificationResponse", frozenset[ErrorCode]]:
        if self.success:
            return self
        if self.error_codes:
            return self.error_codes
        return frozenset({NO_ERROR_CODES})

    def check_error(self) -> None:
        """Raise VerificationError unless the service reported success."""
        outcome = self.to_outcome()
        if outcome is not self:
            raise VerificationError(outcome)

    def __str__(self) -> str:
        def show(value: Any) -> str:
            if value is None:
                return ""
            if isinstance(value, frozenset):
                return ", ".join(sorted(str(v) for v in value))
            return str(value)

        return "\n".join(
            [
                f"Status:         {self.success}",
                f"Timestamp:      {show(self.challenge_ts)}",
                f"Hostname:       {show(self.hostname)}",
                f"Credit:         {show(self.credit)}",
                f"Error Codes:    {show(self.error_codes)}",
                f"Score:          {show(self.score)}",
                f"Score Reason:   {show(self.score_reason)}",
            ]
        )
