"""Shared infrastructure: health endpoints, provider adapter, exceptions."""
