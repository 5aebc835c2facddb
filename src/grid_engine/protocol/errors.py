"""Errors raised while decoding backend notifications."""

from __future__ import annotations

from typing import Any, Optional


class ProtocolError(ValueError):
    """Raised when a known event carries arguments of the wrong shape."""

    def __init__(self, message: str, *, event: Optional[str] = None, args: Any = None) -> None:
        super().__init__(message)
        self.event = event
        self.args_received = args


class UnknownNotificationError(RuntimeError):
    """Raised in strict mode for a notification category nobody handles."""

    def __init__(self, method: str, args: Any = None) -> None:
        super().__init__(f"Unknown notification '{method}'")
        self.method = method
        self.args_received = args


__all__ = ["ProtocolError", "UnknownNotificationError"]
