"""
Flux Events: Action Helpers
=============================
Convenience for hosts that dispatch (action_type, payload) pairs.

The Broadcaster itself does not know about actions. It hands every
positional value through unchanged. These helpers only agree on a
two-value shape on top of that.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

from flux.events.broadcaster import Broadcaster


ActionCallback = Callable[[str, Any], Any]


def _validate_action_type(action_type: str) -> None:
    if not action_type or not isinstance(action_type, str):
        raise ValueError("action_type must be a non-empty string.")


def dispatch_action(
    broadcaster: Broadcaster, action_type: str, payload: Any = None
) -> None:
    """Dispatch payload tagged with action_type."""
    _validate_action_type(action_type)
    broadcaster.dispatch(action_type, payload)


def handles_action(*action_types: str) -> Callable[[ActionCallback], ActionCallback]:
    """
    Restrict an (action_type, payload) callback to the given actions.

    Other actions return immediately, as do bare-payload broadcasts
    (first value not a string, or no values at all). The callback
    still counts as handled for wait_for() ordering.

    Usage:
        @handles_action("cart.item.added", "cart.item.removed")
        def on_cart_change(action_type, payload):
            ...

        broadcaster.register(on_cart_change)
    """
    if not action_types:
        raise ValueError("handles_action() needs at least one action type.")
    for action_type in action_types:
        _validate_action_type(action_type)

    accepted = frozenset(action_types)

    def decorator(callback: ActionCallback) -> ActionCallback:
        @functools.wraps(callback)
        def wrapper(*payload: Any) -> Any:
            # Bare-payload broadcasts share the broadcaster; skip them
            if not payload or not isinstance(payload[0], str):
                return None
            action_type = payload[0]
            if action_type not in accepted:
                return None
            return callback(action_type, payload[1] if len(payload) > 1 else None)

        wrapper.action_types = accepted
        return wrapper

    return decorator
