"""Logging configuration, correlation ids and request middleware."""

from docmanager.observability.logger import configure_logging

__all__ = ["configure_logging"]
