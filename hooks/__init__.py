"""Host hook handlers."""
