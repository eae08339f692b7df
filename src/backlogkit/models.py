# backlogkit/models.py
"""Pydantic models shared by the request engine and the resource clients.

The Backlog API reports failures as a JSON object with a top-level message
and an optional list of detailed errors. These models give that envelope a
validated shape and provide the containers returned by file downloads.

Error envelopes are parsed leniently: a field of an unexpected type is
dropped on its own, so the remaining fields still produce a message.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _code_or_none(value: Any) -> int | str | None:
    if isinstance(value, bool):
        return None
    return value if isinstance(value, int | str) else None


class ErrorDetail(BaseModel):
    """A single entry of the `errors` list in an API error body."""

    model_config = ConfigDict(extra="allow")

    message: str | None = None
    code: int | str | None = None
    errorInfo: Any = None
    moreInfo: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def _lenient_message(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("code", mode="before")
    @classmethod
    def _lenient_code(cls, value: Any) -> int | str | None:
        return _code_or_none(value)


class ErrorBody(BaseModel):
    """The JSON envelope of an API error response."""

    model_config = ConfigDict(extra="allow")

    message: str | None = None
    code: int | str | None = None
    errors: list[ErrorDetail] | None = None

    @field_validator("message", mode="before")
    @classmethod
    def _lenient_message(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("code", mode="before")
    @classmethod
    def _lenient_code(cls, value: Any) -> int | str | None:
        return _code_or_none(value)

    @field_validator("errors", mode="before")
    @classmethod
    def _lenient_errors(cls, value: Any) -> list[dict[str, Any]] | None:
        # Entries that are not objects keep their position as empty details.
        if not isinstance(value, list):
            return None
        return [item if isinstance(item, dict) else {} for item in value]

    @classmethod
    def from_payload(cls, payload: Any) -> "ErrorBody":
        """Builds an ErrorBody from an arbitrary decoded JSON payload.

        Payloads that are not objects produce an empty body so the generic
        message applies.
        """
        if not isinstance(payload, dict):
            return cls()
        try:
            return cls.model_validate(payload)
        except ValueError:
            return cls(message=_text_or_none(payload.get("message")))

    def resolved_message(self) -> str:
        """Returns the first nested error message, the top-level message, or a generic one."""
        if self.errors and self.errors[0].message:
            return self.errors[0].message
        if self.message:
            return self.message
        return UNKNOWN_ERROR_MESSAGE


class DownloadResult(BaseModel):
    """Raw payload of a file download and the filename the server announced."""

    body: bytes
    file_name: str | None = None


class FileData(DownloadResult):
    """A downloaded file together with the URL it was fetched from.

    The URL never includes the query string, so no credential is exposed.
    """

    url: str
