"""Request/response data contracts."""
