"""
Flux Events: Public API
=========================
Synchronous broadcaster with wait_for() ordering between callbacks.
"""

from flux.events.actions import dispatch_action, handles_action
from flux.events.broadcaster import Broadcaster, CallbackState
from flux.events.config import BroadcasterConfig
from flux.events.defaults import get_default_broadcaster, set_default_broadcaster
from flux.events.errors import (
    AlreadyDispatchingError,
    BroadcastError,
    BroadcastErrorCode,
    CircularDependencyError,
    InvalidCallbackError,
    NotDispatchingError,
    UnknownTokenError,
)
from flux.events.registry import CallbackRegistry

__all__ = [
    "Broadcaster",
    "BroadcasterConfig",
    "CallbackRegistry",
    "CallbackState",
    "dispatch_action",
    "handles_action",
    "get_default_broadcaster",
    "set_default_broadcaster",
    "BroadcastError",
    "BroadcastErrorCode",
    "UnknownTokenError",
    "AlreadyDispatchingError",
    "NotDispatchingError",
    "CircularDependencyError",
    "InvalidCallbackError",
]
