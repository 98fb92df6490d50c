"""Process-level setup run before the GUI or the API server starts."""

from __future__ import annotations

from .logging import configure_logging

__all__ = ["configure_logging"]
