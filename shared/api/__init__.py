"""Shared API routers."""
