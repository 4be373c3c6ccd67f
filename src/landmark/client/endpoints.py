"""Endpoint descriptors for the backend API."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, TypeAlias


class HTTPMethod(str, Enum):
    """HTTP methods supported by the client."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


JSON_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


class ChatEndpoint(Enum):
    """Chat API operations.

    Each member carries a fixed path, method and header set.
    """

    SEND_MESSAGE = "send_message"

    @property
    def path(self) -> str:
        return _CHAT_PATHS[self]

    @property
    def method(self) -> HTTPMethod:
        return _CHAT_METHODS[self]

    @property
    def headers(self) -> Mapping[str, str]:
        return JSON_HEADERS


_CHAT_PATHS: dict[ChatEndpoint, str] = {
    ChatEndpoint.SEND_MESSAGE: "/api/ai/chat",
}

_CHAT_METHODS: dict[ChatEndpoint, HTTPMethod] = {
    ChatEndpoint.SEND_MESSAGE: HTTPMethod.POST,
}

# Closed set of operations the client can issue
Endpoint: TypeAlias = ChatEndpoint
