"""Application use cases orchestrating domain operations."""
