"""Errors raised by the Kafka Connect client.

Transport failures (DNS, refused connections, timeouts) are left as the
``httpx.TransportError`` raised by the underlying client. Everything else
derives from ``ConnectError``.
"""

import httpx
from pydantic import ValidationError

from kafka_connect.schemas import ErrorBody


class ConnectError(Exception):
    """Base exception for the Kafka Connect client."""


class MalformedPathError(ConnectError, ValueError):
    """Raised when a request path cannot be parsed as a URL reference."""


class InvalidArgumentError(ConnectError, ValueError):
    """Raised when local input is rejected before any request is sent."""


class ResponseError(ConnectError):
    """An error tied to an HTTP response.

    ``code`` is the API error code reported by the server, or 0 when the
    response did not carry a structured error.
    """

    code: int = 0

    def __init__(self, message: str, response: httpx.Response) -> None:
        self.message = message
        self.response = response
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.response.status_code


class APIError(ResponseError):
    """A structured error reported by the Kafka Connect API."""

    def __init__(self, code: int, message: str | None, response: httpx.Response) -> None:
        if not message:
            message = (
                f"HTTP {response.status_code} {response.reason_phrase} (error code {code})"
            )
        super().__init__(message, response)
        self.code = code


class UnclassifiedHTTPError(ResponseError):
    """An HTTP error status whose body was not a structured API error."""


class DecodeError(ResponseError):
    """A successful response whose body did not match the expected shape."""


def classify_error(request: httpx.Request, response: httpx.Response) -> ResponseError:
    """Turn an HTTP error response into the matching exception.

    The server sometimes answers with an HTML page or an empty body instead
    of ``{"error_code": ..., "message": ...}``, so anything that does not
    decode to a nonzero error code falls back to a generic error naming the
    status, method and URL.
    """
    body = response.read()
    try:
        payload = ErrorBody.model_validate_json(body)
    except ValidationError:
        payload = None

    if payload is not None and payload.error_code != 0:
        return APIError(payload.error_code, payload.message, response)

    return UnclassifiedHTTPError(
        f"HTTP {response.status_code} {response.reason_phrase} on {request.method} {request.url}",
        response,
    )
