"""Chat orchestration."""
