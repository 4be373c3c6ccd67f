"""HTTP client for the chat-completion backend."""

from landmark.client.api_client import APIClient, close_api_client, get_api_client
from landmark.client.endpoints import ChatEndpoint, Endpoint, HTTPMethod

__all__ = [
    "APIClient",
    "ChatEndpoint",
    "Endpoint",
    "HTTPMethod",
    "close_api_client",
    "get_api_client",
]
