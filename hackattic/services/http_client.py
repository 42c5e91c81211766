"""
Reusable HTTP client with configured timeouts and connection pooling.

One instance owns one httpx connection pool; construct it once per process
and hand it to whatever needs to talk to the platform.
"""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter

from hackattic.config import Settings
from hackattic.exceptions import DecodeError, HTTPError, RequestTimeoutError, TransportError
from hackattic.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


@dataclass(frozen=True, slots=True)
class ClientConfig:
    base_url: str
    timeout: float = 30.0
    max_idle_connections: int = 100
    max_connections_per_host: int = 100
    max_idle_connections_per_host: int = 10
    idle_connection_timeout: float = 90.0
    keep_alive: bool = True
    headers: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))

    @staticmethod
    def from_settings(settings: Settings) -> "ClientConfig":
        return ClientConfig(
            base_url=settings.base_url,
            timeout=settings.http_timeout_seconds,
            max_idle_connections=settings.http_max_idle_connections,
            max_connections_per_host=settings.http_max_connections_per_host,
            max_idle_connections_per_host=settings.http_max_idle_connections_per_host,
            idle_connection_timeout=settings.http_idle_connection_timeout_seconds,
            keep_alive=settings.http_keep_alive,
        )

    def limits(self) -> httpx.Limits:
        # httpx keeps a single pool rather than one per host; apply the tighter bound.
        keepalive = 0
        if self.keep_alive:
            keepalive = min(self.max_idle_connections, self.max_idle_connections_per_host)
        return httpx.Limits(
            max_connections=self.max_connections_per_host,
            max_keepalive_connections=keepalive,
            keepalive_expiry=self.idle_connection_timeout,
        )


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Per-call overrides. Headers are layered over the client defaults."""

    headers: Mapping[str, str] | None = None
    timeout: float | None = None
    params: Mapping[str, str] | None = None


@dataclass(frozen=True, slots=True)
class Response:
    status_code: int
    headers: httpx.Headers
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def decode_json(self, shape: Any = None) -> Any:
        """
        Decode the body as JSON.

        With ``shape`` (a pydantic model, dataclass, TypedDict or any type
        pydantic understands) the result is validated into that shape.
        Raises DecodeError on malformed JSON or a shape mismatch.
        """
        try:
            if shape is None:
                return json.loads(self.body)
            return TypeAdapter(shape).validate_json(self.body)
        except ValueError as e:
            raise DecodeError(f"Failed to decode response body: {e}") from e


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True).encode()
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    try:
        return json.dumps(body).encode()
    except (TypeError, ValueError) as e:
        raise ValueError(f"Failed to encode request body: {e}") from e


class HTTPClient:
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._headers = dict(config.headers)
        self._headers_lock = threading.Lock()
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            limits=config.limits(),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def default_headers(self) -> dict[str, str]:
        with self._headers_lock:
            return dict(self._headers)

    def set_default_headers(self, headers: Mapping[str, str]) -> None:
        """Replace the default headers wholesale."""
        replacement = dict(headers)
        with self._headers_lock:
            self._headers = replacement

    def get(self, endpoint: str, options: RequestOptions | None = None) -> Response:
        return self.request("GET", endpoint, options=options)

    def post(
        self, endpoint: str, body: Any = None, options: RequestOptions | None = None
    ) -> Response:
        return self.request("POST", endpoint, body=body, options=options)

    def put(
        self, endpoint: str, body: Any = None, options: RequestOptions | None = None
    ) -> Response:
        return self.request("PUT", endpoint, body=body, options=options)

    def delete(self, endpoint: str, options: RequestOptions | None = None) -> Response:
        return self.request("DELETE", endpoint, options=options)

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> Response:
        """
        Send a request and read the whole body.

        Raises HTTPError for status >= 400 (response attached), TransportError
        for network failures and RequestTimeoutError when the deadline passes.
        """
        options = options or RequestOptions()
        content = _encode_body(body)
        headers = self._build_headers(options, has_body=content is not None)
        timeout = self._effective_timeout(options)
        start_time = time.perf_counter()
        deadline = time.monotonic() + timeout

        try:
            with self._client.stream(
                method,
                endpoint,
                content=content,
                headers=headers,
                params=options.params,
                timeout=timeout,
            ) as raw:
                body_bytes = b"".join(_read_before(raw, deadline, method, endpoint))
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timed out: {method} {_path(endpoint)}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {method} {_path(endpoint)}: {e}") from e

        response = Response(status_code=raw.status_code, headers=raw.headers, body=body_bytes)
        logger.debug(
            "http_request_completed",
            method=method,
            path=_path(endpoint),
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        if response.status_code >= 400:
            raise HTTPError(response.status_code, response.body, response)
        return response

    @contextmanager
    def stream(
        self, method: str, endpoint: str, options: RequestOptions | None = None
    ) -> Iterator[Iterator[bytes]]:
        """
        Open a streaming request and yield an iterator over body chunks.

        Error mapping matches ``request``, including the overall deadline,
        which is enforced while the chunks are consumed inside the block.
        """
        options = options or RequestOptions()
        headers = self._build_headers(options, has_body=False)
        timeout = self._effective_timeout(options)
        deadline = time.monotonic() + timeout

        try:
            with self._client.stream(
                method,
                endpoint,
                headers=headers,
                params=options.params,
                timeout=timeout,
            ) as raw:
                if raw.status_code >= 400:
                    body = b"".join(_read_before(raw, deadline, method, endpoint))
                    response = Response(status_code=raw.status_code, headers=raw.headers, body=body)
                    raise HTTPError(response.status_code, response.body, response)
                yield _read_before(raw, deadline, method, endpoint)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timed out: {method} {_path(endpoint)}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {method} {_path(endpoint)}: {e}") from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _build_headers(self, options: RequestOptions, *, has_body: bool) -> httpx.Headers:
        headers = httpx.Headers(self.default_headers)
        if options.headers:
            headers.update(options.headers)
        if has_body and "content-type" not in headers:
            headers["Content-Type"] = "application/json"
        return headers

    def _effective_timeout(self, options: RequestOptions) -> float:
        if options.timeout is None:
            return self._config.timeout
        if options.timeout <= 0:
            raise ValueError("Per-request timeout must be positive")
        return min(options.timeout, self._config.timeout)


def _path(endpoint: str) -> str:
    """Endpoint without its query string, which may carry the access token."""
    return endpoint.split("?", 1)[0]


def _read_before(
    raw: httpx.Response, deadline: float, method: str, endpoint: str
) -> Iterator[bytes]:
    """
    Yield body chunks, raising RequestTimeoutError once ``deadline`` has passed.

    httpx timeouts bound each network operation; this bounds the whole call.
    A single stalled read can still overrun by at most the read timeout.
    """
    if time.monotonic() > deadline:
        raise RequestTimeoutError(f"Request deadline exceeded: {method} {_path(endpoint)}")
    for chunk in raw.iter_bytes():
        if time.monotonic() > deadline:
            raise RequestTimeoutError(f"Request deadline exceeded: {method} {_path(endpoint)}")
        yield chunk
