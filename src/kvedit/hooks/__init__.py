"""Process-wide setup hooks."""

from __future__ import annotations

from kvedit.hooks.logging_config import setup_logging

__all__ = ["setup_logging"]
