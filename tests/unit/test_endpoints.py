"""Tests for endpoint descriptors."""

import pytest

from landmark.client.endpoints import ChatEndpoint, HTTPMethod


class TestHTTPMethod:
    """Tests for HTTPMethod enum."""

    def test_values(self):
        """Test the supported methods."""
        assert [method.value for method in HTTPMethod] == [
            "GET",
            "POST",
            "PUT",
            "DELETE",
            "PATCH",
        ]


class TestChatEndpoint:
    """Tests for ChatEndpoint."""

    def test_send_message(self):
        """Test the chat completion endpoint description."""
        endpoint = ChatEndpoint.SEND_MESSAGE
        assert endpoint.path == "/api/ai/chat"
        assert endpoint.method == HTTPMethod.POST
        assert dict(endpoint.headers) == {"Content-Type": "application/json"}

    @pytest.mark.parametrize("endpoint", list(ChatEndpoint))
    def test_every_member_described(self, endpoint):
        """Test every endpoint has a path and method."""
        assert endpoint.path.startswith("/")
        assert isinstance(endpoint.method, HTTPMethod)

    def test_headers_are_read_only(self):
        """Test endpoint headers cannot be mutated."""
        with pytest.raises(TypeError):
            ChatEndpoint.SEND_MESSAGE.headers["X-Extra"] = "1"
