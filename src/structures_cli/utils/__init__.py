"""Shared utilities."""

from .log_config import setup_logging

__all__ = ["setup_logging"]
