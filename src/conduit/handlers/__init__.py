"""Application request handlers."""
