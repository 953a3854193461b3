"""API routers."""

from app.api import chat

__all__ = ["chat"]
