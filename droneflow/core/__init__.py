"""Core infrastructure: database and logging."""
