"""LandMark chat client: a typed HTTP client for a chat-completion backend."""

__version__ = "1.0.0"
