"""Shared fixtures for unit tests."""

import json
from typing import Any, Callable

import httpx
import pytest

from landmark.client.api_client import APIClient

BASE_URL = "https://backend.test"


def chat_payload(
    content: str = "Hi there!",
    success: bool = True,
    choices: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a backend success envelope."""
    if choices is None:
        choices = [
            {
                "logprobs": None,
                "finish_reason": "stop",
                "native_finish_reason": "STOP",
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": content,
                    "refusal": None,
                    "reasoning": None,
                },
            }
        ]
    return {
        "success": success,
        "data": {
            "id": "gen-123",
            "provider": "Google",
            "model": "google/gemini-2.0-flash-001",
            "object": "chat.completion",
            "created": 1760000000,
            "choices": choices,
            "usage": {
                "prompt_tokens": 3,
                "completion_tokens": 4,
                "total_tokens": 7,
            },
        },
    }


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


@pytest.fixture
def make_client() -> Callable[..., APIClient]:
    """Factory for APIClients backed by an httpx.MockTransport handler."""

    def factory(handler: Callable, **kwargs: Any) -> APIClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("base_url", BASE_URL)
        return APIClient(http_client=http_client, **kwargs)

    return factory


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """List collecting requests seen by a mock handler."""
    return []
