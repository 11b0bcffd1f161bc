"""
Flux Events: Default Broadcaster
==================================
Optional process-wide instance for hosts that want one.

The Broadcaster never reads this itself. Construct your own
instances wherever explicit wiring is possible.
"""

from __future__ import annotations

from flux.events.broadcaster import Broadcaster


_default_broadcaster: Broadcaster = Broadcaster()


def set_default_broadcaster(broadcaster: Broadcaster) -> None:
    """Override the default broadcaster (wiring or testing only)."""
    if not isinstance(broadcaster, Broadcaster):
        raise TypeError(
            f"Expected Broadcaster, got {type(broadcaster).__name__}."
        )
    global _default_broadcaster
    _default_broadcaster = broadcaster


def get_default_broadcaster() -> Broadcaster:
    """Get the current default broadcaster."""
    return _default_broadcaster
