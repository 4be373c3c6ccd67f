"""Async HTTP client for the chat-completion backend.

A request goes through four steps, each with its own failure kind:

1. Resolve the endpoint path against the base address (InvalidTargetError).
2. Serialize the body and build the request (EncodingFailedError).
3. Send it once and validate the status (TransportFailedError,
   BadStatusError, EmptyPayloadError).
4. Decode the payload into the expected model (DecodingFailedError).
"""

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from landmark.client.endpoints import Endpoint
from landmark.config import Settings, get_settings
from landmark.exceptions import (
    BadStatusError,
    DecodingFailedError,
    EmptyPayloadError,
    EncodingFailedError,
    InvalidTargetError,
    TransportFailedError,
)
from landmark.utils.errors import truncate_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0
ALLOWED_SCHEMES = frozenset({"http", "https"})


def encode_body(body: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Pydantic models are dumped with their wire aliases and without unset
    optional fields. Datetimes are written as ISO-8601.

    Raises:
        EncodingFailedError: If the value cannot be represented as JSON.
    """
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
        return to_json(body, by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingFailedError(e) from e


def _error_fields(exc: ValidationError) -> list[str]:
    """Dotted field paths from a validation error."""
    paths = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    return [path for path in paths if path]


class APIClient:
    """Typed client for the backend API.

    Holds a single ``httpx.AsyncClient`` whose connection pool is reused
    for every request. The client is immutable after construction.

    Args:
        base_url: Scheme and host of the backend, without trailing path.
        timeout_seconds: Upper bound for a single request.
        extra_headers: Headers sent on every request before endpoint headers.
        http_client: Optional preconfigured transport session (for tests).
        log_request_body: Log serialized request bodies at DEBUG.
        log_response_body: Log response bodies at DEBUG.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        extra_headers: Mapping[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
        log_request_body: bool = False,
        log_response_body: bool = False,
    ) -> None:
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.extra_headers = dict(extra_headers or {})
        self.log_request_body = log_request_body
        self.log_response_body = log_response_body
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> "APIClient":
        """Create a client from application settings."""
        return cls(
            base_url=settings.api.base_url,
            timeout_seconds=settings.api.timeout_seconds,
            extra_headers=settings.api.extra_headers,
            http_client=http_client,
            log_request_body=settings.logging.include_request_body,
            log_response_body=settings.logging.include_response_body,
        )

    def resolve_url(self, endpoint: Endpoint) -> httpx.URL:
        """Resolve an endpoint to an absolute URL.

        Args:
            endpoint: The endpoint descriptor.

        Returns:
            The absolute target URL.

        Raises:
            InvalidTargetError: If base address and path do not form a valid
                absolute http(s) URL.
        """
        target = self.base_url + endpoint.path

        try:
            url = httpx.URL(target)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            logger.warning(f"Invalid target {target!r}: {e}")
            raise InvalidTargetError(target) from e

        if url.scheme not in ALLOWED_SCHEMES or not url.host:
            logger.warning(f"Invalid target {target!r}: not an absolute http(s) URL")
            raise InvalidTargetError(target)

        logger.debug(f"Resolved {endpoint.name} to {url}")
        return url

    def build_request(self, endpoint: Endpoint, body: Any = None) -> httpx.Request:
        """Build a transport-ready request for an endpoint.

        Args:
            endpoint: The endpoint descriptor.
            body: Optional body value, serialized as JSON.

        Returns:
            The request, with timeout bound to this client's setting.

        Raises:
            InvalidTargetError: If the endpoint does not resolve.
            EncodingFailedError: If the body cannot be serialized.
        """
        url = self.resolve_url(endpoint)

        content = None
        if body is not None:
            content = encode_body(body)
            if self.log_request_body:
                logger.debug(f"Request body: {content.decode('utf-8', errors='replace')}")

        headers = {**self.extra_headers, **endpoint.headers}

        return self._http.build_request(
            endpoint.method.value,
            url,
            headers=headers,
            content=content,
            timeout=self.timeout_seconds,
        )

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Execute a request exactly once and validate the response status.

        Args:
            request: The request to send.

        Returns:
            The response, guaranteed to have a 2xx status and a non-empty body.

        Raises:
            TransportFailedError: On connection, DNS, TLS or timeout faults.
            BadStatusError: If the status is missing or outside 200-299.
            EmptyPayloadError: If a successful response has no body.
        """
        logger.info(
            "Request started",
            extra={"method": request.method, "url": str(request.url)},
        )

        start_time = time.perf_counter()
        try:
            # Total bound; httpx timeouts only cover individual phases
            response = await asyncio.wait_for(
                self._http.send(request), timeout=self.timeout_seconds
            )
        except (httpx.RequestError, TimeoutError) as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.warning(
                f"Transport failure: {type(e).__name__}: {e}",
                extra={
                    "method": request.method,
                    "url": str(request.url),
                    "duration_ms": duration_ms,
                    "error_type": type(e).__name__,
                },
            )
            raise TransportFailedError(e) from e

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        status_code = getattr(response, "status_code", None)

        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": status_code,
                "duration_ms": duration_ms,
            },
        )

        if not isinstance(status_code, int):
            raise BadStatusError(0)

        if not 200 <= status_code <= 299:
            body = response.text or None
            logger.warning(
                f"Bad status code {status_code}: {truncate_error(body or '')}",
                extra={"status_code": status_code},
            )
            raise BadStatusError(status_code, body=body)

        if not response.content:
            logger.warning("Empty response body", extra={"status_code": status_code})
            raise EmptyPayloadError()

        if self.log_response_body:
            logger.debug(f"Response body: {response.text}")

        return response

    def decode(self, content: bytes | str, response_model: type[T]) -> T:
        """Decode a JSON payload into ``response_model``.

        Decoding is strict and all-or-nothing: a missing field or a value of
        the wrong kind fails the whole payload.

        Raises:
            DecodingFailedError: If the payload does not match the model.
        """
        try:
            return TypeAdapter(response_model).validate_json(content, strict=True)
        except ValidationError as e:
            fields = _error_fields(e)
            logger.warning(
                f"Failed to decode {getattr(response_model, '__name__', response_model)}: "
                f"{', '.join(fields)}",
                extra={"error_type": type(e).__name__},
            )
            raise DecodingFailedError(e, fields=fields) from e

    async def request(
        self,
        endpoint: Endpoint,
        response_model: type[T],
        body: Any = None,
    ) -> T:
        """Issue a request and decode the response.

        Args:
            endpoint: The endpoint descriptor.
            response_model: Type the success payload decodes to.
            body: Optional request body.

        Returns:
            The decoded response.

        Raises:
            NetworkError: Subclass describing the failed step.
        """
        request = self.build_request(endpoint, body)
        response = await self.send(request)
        result = self.decode(response.content, response_model)
        logger.debug(f"Decoded {endpoint.name} response")
        return result

    async def aclose(self) -> None:
        """Close the underlying transport session."""
        await self._http.aclose()


_client: APIClient | None = None


def get_api_client(settings: Settings | None = None) -> APIClient:
    """Get the process-wide API client, creating it on first use.

    Args:
        settings: Settings used on first creation; defaults to get_settings().

    Returns:
        The shared APIClient.
    """
    global _client
    if _client is None:
        _client = APIClient.from_settings(settings or get_settings())
    return _client


async def close_api_client() -> None:
    """Close and forget the process-wide API client."""
    global _client
    if _client is not None:
        client, _client = _client, None
        await client.aclose()


__all__ = [
    "APIClient",
    "DEFAULT_TIMEOUT_SECONDS",
    "close_api_client",
    "encode_body",
    "get_api_client",
]
