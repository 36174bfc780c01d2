"""Chat core services."""
