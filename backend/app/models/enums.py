"""
Enum definitions for the application.
"""

from enum import Enum


class MessageRole(str, Enum):
    """Role of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
