import logging
from functools import lru_cache
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from kafka_connect.config import DEFAULT_HOST_URL, TIMEOUT, USER_AGENT
from kafka_connect.errors import DecodeError, InvalidArgumentError, MalformedPathError, classify_error

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _encode(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return to_jsonable_python(body)


class ConnectClient:
    """Client for the Kafka Connect REST API.

    Requests are built relative to ``base_url``, which is always treated as a
    directory. Responses are decoded into the shape the caller asks for, and
    HTTP error statuses are raised as ``ResponseError`` subclasses.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_HOST_URL,
        http: httpx.Client | None = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise InvalidArgumentError(f"base URL {base_url} is not a valid URL: {e}") from e
        if not url.is_absolute_url:
            raise InvalidArgumentError(f"base URL {base_url} is not an absolute URL")
        if not url.path.endswith("/"):
            url = url.copy_with(path=url.path + "/")

        self._base_url = url
        self._user_agent = user_agent
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(timeout=TIMEOUT)

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "ConnectClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build(self, method: str, path: str, body: Any = None) -> httpx.Request:
        """Build a request for ``path`` resolved against the base URL.

        Paths should be given without a leading slash so they stay under the
        base URL's path. A non-None ``body`` is sent as JSON.
        """
        try:
            url = self._base_url.join(path)
        except httpx.InvalidURL as e:
            raise MalformedPathError(f"invalid request path {path!r}: {e}") from e

        headers = {"Accept": "application/json"}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent

        if body is None:
            return self.http.build_request(method, url, headers=headers)
        return self.http.build_request(method, url, headers=headers, json=_encode(body))

    def execute(
        self, request: httpx.Request, target: Any = None
    ) -> tuple[Any, httpx.Response]:
        """Send ``request`` and decode the response body into ``target``.

        An empty body on success leaves the value as None. Error statuses are
        raised without decoding.
        """
        logger.debug("%s %s", request.method, request.url)
        response = self.http.send(request)
        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)

        if response.status_code >= 400:
            raise classify_error(request, response)

        if target is None or not response.content.strip():
            return None, response

        try:
            value = _adapter(target).validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(
                f"could not decode response to {request.method} {request.url}: {e}", response
            ) from e
        return value, response

    def get(self, path: str, target: Any = None) -> tuple[Any, httpx.Response]:
        return self.execute(self.build("GET", path), target)

    def delete(self, path: str) -> httpx.Response:
        _, response = self.execute(self.build("DELETE", path))
        return response
