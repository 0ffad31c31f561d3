"""Type definitions for Geotab API responses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .exceptions import ApiError, IncorrectCredentialsError

INCORRECT_CREDENTIALS_PREFIX = "Incorrect MyGeotab login credentials"


class ErrorKind(Enum):
    """Classification of a server-reported error."""

    INCORRECT_CREDENTIALS = "incorrect_credentials"
    API = "api"


@dataclass(frozen=True)
class ErrorDetail:
    """A single entry of ``error.errors``."""

    message: str
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorDetail":
        """Create ErrorDetail from dictionary."""
        return cls(message=str(data.get("message", "")), name=data.get("name"))


@dataclass(frozen=True)
class Success:
    """A response carrying a ``result``."""

    result: Any


@dataclass(frozen=True)
class Failure:
    """A response carrying an ``error``.

    The kind and message are taken from the first reported error; the full
    list is kept in ``errors``.
    """

    kind: ErrorKind
    message: str
    errors: list[ErrorDetail] = field(default_factory=list)

    @property
    def code(self) -> str | None:
        return self.errors[0].name if self.errors else None

    def raise_error(self) -> None:
        """Raise the exception matching this failure's kind."""
        if self.kind is ErrorKind.INCORRECT_CREDENTIALS:
            raise IncorrectCredentialsError(self.message, self.code)
        raise ApiError(self.message, self.code)

    @classmethod
    def from_error(cls, error: Any) -> "Failure":
        """Create Failure from the ``error`` member of a response.

        A bare string (or other non-object) error is used as the message.
        """
        if not isinstance(error, dict):
            return cls(kind=ErrorKind.API, message=str(error) or "Unknown Geotab API error")

        errors = [
            ErrorDetail.from_dict(e) for e in error.get("errors") or [] if isinstance(e, dict)
        ]

        if errors:
            message = errors[0].message
        else:
            message = str(error.get("message") or "Unknown Geotab API error")

        if message.startswith(INCORRECT_CREDENTIALS_PREFIX):
            kind = ErrorKind.INCORRECT_CREDENTIALS
        else:
            kind = ErrorKind.API

        return cls(kind=kind, message=message, errors=errors)


Response = Union[Success, Failure]


def parse_response(body: dict[str, Any]) -> Response:
    """Convert a decoded response body into a Success or Failure."""
    if body.get("error") is not None:
        return Failure.from_error(body["error"])
    return Success(result=body.get("result"))


@dataclass
class FeedResult:
    """Result of a GetFeed query."""

    results: list[Any]
    to_version: str | None

    def __getitem__(self, key: str) -> Any:
        if key not in ("results", "to_version"):
            raise KeyError(key)
        return getattr(self, key)

    @classmethod
    def from_result(cls, result: dict[str, Any] | None) -> "FeedResult":
        """Split a raw feed result into its records and next version.

        The records are returned as raw dictionaries; callers wrap them in
        entities.
        """
        result = result or {}
        return cls(
            results=list(result.get("data") or []),
            to_version=result.get("toVersion"),
        )
