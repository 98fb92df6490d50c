"""Server-side collaborators: the chat endpoint and its model gateway."""

from __future__ import annotations

from .model_gateway import ChatModelGateway, ModelCallFailed, ModelNotConfigured

__all__ = ["ChatModelGateway", "ModelCallFailed", "ModelNotConfigured"]
