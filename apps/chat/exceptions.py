"""Exceptions raised by the chat services."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for chat failures reported back to the client."""


class ChatPermissionError(ChatError):
    """Raised when a user acts on a conversation they do not belong to."""
