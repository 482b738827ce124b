"""Utility helpers."""

from idiomguard.utils.logging import configure_logging

__all__ = ["configure_logging"]
