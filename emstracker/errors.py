"""
Error model for tracking retrieval.

Every failure raised by the tracker is a ``TrackingError``. An error holds an
ordered list of causes: the first cause is the one rendered to the user, the
remaining ones record the context in which it happened (for example, a body
read failure that occurred while reporting a rejected request).
"""

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests


class ErrorKind(str, Enum):
    """Kinds of tracking failures."""
    JSON_PARSE_FAILURE = "json_parse_failure"
    TEXT_ENCODING_FAILURE = "text_encoding_failure"
    TRANSPORT_FAILURE = "transport_failure"
    IO_FAILURE = "io_failure"
    REQUEST_REJECTED = "request_rejected"
    RESPONSE_SHAPE_FAILURE = "response_shape_failure"
    HTML_STRUCTURE_FAILURE = "html_structure_failure"
    DATE_PARSE_FAILURE = "date_parse_failure"


# Used when a kind that normally wraps an exception has none attached
_FALLBACK_DESCRIPTIONS = {
    ErrorKind.JSON_PARSE_FAILURE: "Invalid JSON document",
    ErrorKind.TEXT_ENCODING_FAILURE: "Invalid UTF-8 sequence",
    ErrorKind.TRANSPORT_FAILURE: "HTTP transport error",
    ErrorKind.IO_FAILURE: "I/O error",
    ErrorKind.DATE_PARSE_FAILURE: "Cannot parse date",
}


@dataclass(frozen=True)
class ErrorCause:
    """One entry of an error's cause chain."""

    kind: ErrorKind
    source: Optional[BaseException] = None
    status_code: Optional[int] = None
    content: Optional[bytes] = None
    message: Optional[str] = None

    @classmethod
    def json_parse_failure(cls, source: BaseException) -> "ErrorCause":
        return cls(ErrorKind.JSON_PARSE_FAILURE, source=source)

    @classmethod
    def text_encoding_failure(cls, source: BaseException) -> "ErrorCause":
        return cls(ErrorKind.TEXT_ENCODING_FAILURE, source=source)

    @classmethod
    def transport_failure(cls, source: BaseException) -> "ErrorCause":
        return cls(ErrorKind.TRANSPORT_FAILURE, source=source)

    @classmethod
    def io_failure(cls, source: BaseException) -> "ErrorCause":
        return cls(ErrorKind.IO_FAILURE, source=source)

    @classmethod
    def request_rejected(
        cls,
        status_code: int,
        content: Optional[bytes] = None,
        message: Optional[str] = None,
    ) -> "ErrorCause":
        return cls(
            ErrorKind.REQUEST_REJECTED,
            status_code=status_code,
            content=content,
            message=message,
        )

    @classmethod
    def response_shape_failure(cls, message: str) -> "ErrorCause":
        return cls(ErrorKind.RESPONSE_SHAPE_FAILURE, message=message)

    @classmethod
    def html_structure_failure(cls, message: str) -> "ErrorCause":
        return cls(ErrorKind.HTML_STRUCTURE_FAILURE, message=message)

    @classmethod
    def date_parse_failure(
        cls,
        source: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> "ErrorCause":
        return cls(ErrorKind.DATE_PARSE_FAILURE, source=source, message=message)

    @property
    def description(self) -> str:
        """Fixed, human-readable description of this cause."""
        if self.kind == ErrorKind.REQUEST_REJECTED:
            return "Request to the tracking service failed"
        if self.kind == ErrorKind.RESPONSE_SHAPE_FAILURE:
            return "Cannot process response from the tracking service"
        if self.kind == ErrorKind.HTML_STRUCTURE_FAILURE:
            return "Unexpected HTML document structure"
        if self.source is not None:
            return str(self.source)
        if self.message:
            return self.message
        return _FALLBACK_DESCRIPTIONS[self.kind]


class TrackingError(Exception):
    """
    Failure while retrieving or parsing tracking information.

    Holds a non-empty, append-only list of causes and the stack captured
    when the error was created.
    """

    def __init__(self, *causes: ErrorCause):
        if not causes or any(cause is None for cause in causes):
            raise ValueError("TrackingError requires at least one cause")
        self.causes: list[ErrorCause] = list(causes)
        self.backtrace = "".join(traceback.format_stack()[:-1])
        super().__init__(causes[0].kind.value)

    def __reduce__(self):
        # Rebuild from the causes so copies and unpickled errors keep them
        return self.__class__, tuple(self.causes), {"backtrace": self.backtrace}

    def caused_by(self, cause: ErrorCause) -> "TrackingError":
        """Append a context cause and return the same error."""
        self.causes.append(cause)
        return self

    @property
    def first(self) -> ErrorCause:
        return self.causes[0]

    @property
    def kind(self) -> ErrorKind:
        return self.first.kind

    def has_kind(self, kind: ErrorKind) -> bool:
        return any(cause.kind == kind for cause in self.causes)

    @property
    def description(self) -> str:
        return self.first.description

    @property
    def cause(self) -> Optional[BaseException]:
        """Underlying exception of the first cause, if there is one."""
        return self.first.source

    def __str__(self) -> str:
        first = self.first

        if first.kind == ErrorKind.HTML_STRUCTURE_FAILURE:
            return f"Wrong HTML document structure: {first.message}"

        if first.kind == ErrorKind.REQUEST_REJECTED:
            content = (first.content or b"").decode("utf-8", errors="replace")
            message = first.message if first.message is not None else "None"
            return f"{first.status_code}: {content}. {message}"

        return self.description

    def __repr__(self) -> str:
        kinds = ", ".join(cause.kind.value for cause in self.causes)
        return f"TrackingError([{kinds}])"

    @classmethod
    def from_http_response(cls, response, message: Optional[str] = None) -> "TrackingError":
        """
        Build a REQUEST_REJECTED error from a non-success HTTP response.

        The body is drained to be kept in the error. If draining fails, the
        I/O failure becomes the first cause and the rejection is chained
        behind it without content.
        """
        try:
            content = response.content
        except (requests.RequestException, OSError) as e:
            return cls(ErrorCause.io_failure(e)).caused_by(
                ErrorCause.request_rejected(response.status_code, None, message)
            )

        return cls(ErrorCause.request_rejected(response.status_code, content, message))
