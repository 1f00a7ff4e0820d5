"""Connectors for external services (exchange API, HTTP plumbing)."""

from hlperps.connectors.http import JsonHttpClient

__all__ = ["JsonHttpClient"]
