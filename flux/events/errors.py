"""
Flux Events: Errors
=====================
Error types for the broadcaster.

Every error carries a machine-readable code and a human-readable
message. Nothing is queued or retried: each one aborts the
operation that raised it and belongs to the caller.
"""

from __future__ import annotations


# ══════════════════════════════════════════════════════════════
# ERROR CODES
# ══════════════════════════════════════════════════════════════

class BroadcastErrorCode:
    """
    Known broadcaster error codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    UNKNOWN_TOKEN = "UNKNOWN_TOKEN"
    ALREADY_DISPATCHING = "ALREADY_DISPATCHING"
    NOT_DISPATCHING = "NOT_DISPATCHING"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    INVALID_CALLBACK = "INVALID_CALLBACK"


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class BroadcastError(Exception):
    """Base error for broadcaster operations."""

    code = "BROADCAST_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict:
        """Serialize for host error reporting."""
        return {"code": self.code, "message": self.message}


class UnknownTokenError(BroadcastError):
    """Token does not map to a registered callback."""

    code = BroadcastErrorCode.UNKNOWN_TOKEN

    def __init__(self, token: str, operation: str):
        self.token = token
        self.operation = operation
        super().__init__(
            f"{operation}(...): '{token}' does not map to a "
            f"registered callback."
        )


class AlreadyDispatchingError(BroadcastError):
    """dispatch() called while another broadcast is active."""

    code = BroadcastErrorCode.ALREADY_DISPATCHING

    def __init__(self):
        super().__init__(
            "dispatch(...): Cannot dispatch in the middle of a dispatch."
        )


class NotDispatchingError(BroadcastError):
    """wait_for() called with no active broadcast."""

    code = BroadcastErrorCode.NOT_DISPATCHING

    def __init__(self):
        super().__init__(
            "wait_for(...): Must be invoked while dispatching."
        )


class CircularDependencyError(BroadcastError):
    """wait_for() reached a callback that is still running."""

    code = BroadcastErrorCode.CIRCULAR_DEPENDENCY

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"wait_for(...): Circular dependency detected while "
            f"waiting for '{token}'."
        )


class InvalidCallbackError(BroadcastError):
    """register() given something that cannot be called."""

    code = BroadcastErrorCode.INVALID_CALLBACK

    def __init__(self, callback: object):
        self.callback = callback
        super().__init__(
            f"register(...): Callback must be callable, "
            f"got {type(callback).__name__}."
        )
