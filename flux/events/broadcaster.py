"""
Flux Events: Broadcaster
==========================
Delivers one payload to every registered callback, synchronously,
with explicit ordering between callbacks.

Dispatch behavior:
1. Refuse to start if a broadcast is already active
2. Mark every registered callback NOT_STARTED
3. Invoke callbacks in registration order
4. A callback may call wait_for(tokens) to have other callbacks
   run first; those are invoked immediately, depth first
5. Each callback runs exactly once per broadcast
6. Always clear the active payload and flag, even on failure

Callback failures are NOT caught. They propagate unchanged out of
dispatch(). Per-token state from a failed broadcast is stale until
the next dispatch() resets it.

This module does NOT:
- Run callbacks in threads
- Retry or back off
- Persist anything
"""

from __future__ import annotations

import logging
from enum import Enum
from threading import Lock
from typing import Any, Callable, Iterable, Optional

from flux.events.config import BroadcasterConfig
from flux.events.errors import (
    AlreadyDispatchingError,
    CircularDependencyError,
    NotDispatchingError,
    UnknownTokenError,
)
from flux.events.registry import CallbackRegistry

logger = logging.getLogger("flux.events")


# ══════════════════════════════════════════════════════════════
# PER-BROADCAST CALLBACK STATE
# ══════════════════════════════════════════════════════════════

class CallbackState(Enum):
    """Where a callback is within the current broadcast."""
    NOT_STARTED = "NOT_STARTED"
    PENDING = "PENDING"     # invoked, not finished (or raised)
    HANDLED = "HANDLED"     # finished


# ══════════════════════════════════════════════════════════════
# BROADCASTER
# ══════════════════════════════════════════════════════════════

class Broadcaster:
    """
    Synchronous callback broadcaster with wait_for() ordering.

    Lifecycle:
        Idle --dispatch--> Dispatching --(done or error)--> Idle

    Usage:
        broadcaster = Broadcaster()

        def save_order(payload):
            ...

        save_token = broadcaster.register(save_order)

        def send_receipt(payload):
            broadcaster.wait_for([save_token])
            ...

        broadcaster.register(send_receipt)
        broadcaster.dispatch({"order_id": 42})
    """

    def __init__(self, config: Optional[BroadcasterConfig] = None):
        self._config = config or BroadcasterConfig()
        self._registry = CallbackRegistry(self._config)
        self._states: dict[str, CallbackState] = {}
        self._pending_payload: Optional[tuple] = None
        self._is_dispatching: bool = False
        self._guard: Optional[Lock] = (
            Lock() if self._config.thread_guard else None
        )

    @property
    def config(self) -> BroadcasterConfig:
        return self._config

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register(self, callback: Callable[..., Any]) -> str:
        """
        Register a callback to be invoked with every dispatched payload.

        Returns:
            Token usable with unregister() and wait_for().
        """
        return self._registry.add(callback)

    def unregister(self, token: str) -> None:
        """
        Remove a callback by token.

        Raises:
            UnknownTokenError: token is not registered
        """
        self._registry.remove(token)

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def dispatch(self, *payload: Any) -> None:
        """
        Dispatch a payload to all registered callbacks.

        Every positional value is handed unchanged to each callback:
        dispatch(p) calls cb(p), dispatch("action", p) calls
        cb("action", p).

        Raises:
            AlreadyDispatchingError: a broadcast is already active
            Any exception raised by a callback, unchanged
        """
        self._enter(payload)
        try:
            # Snapshot: callbacks registered mid-broadcast wait for the next one
            for token in self._registry.tokens():
                if self._states.get(token) is not CallbackState.NOT_STARTED:
                    continue
                if not self._registry.contains(token):
                    # Unregistered by an earlier callback in this broadcast
                    continue
                self._invoke_callback(token)
        finally:
            self._exit()

        handled = sum(
            1 for state in self._states.values()
            if state is CallbackState.HANDLED
        )
        logger.info(f"Dispatch complete: {handled} callbacks handled")

    def wait_for(self, tokens: Iterable[str]) -> None:
        """
        Invoke the named callbacks now, unless they already ran.

        Only valid from inside a callback during a broadcast. When this
        returns, every named callback has finished.

        Raises:
            NotDispatchingError:     no broadcast is active
            CircularDependencyError: a named callback is still running
            UnknownTokenError:       a named token is not registered
        """
        if isinstance(tokens, str):
            raise TypeError(
                "wait_for() expects a sequence of tokens, "
                f"got a single string '{tokens}'."
            )

        if not self._is_dispatching:
            raise NotDispatchingError()

        for token in tokens:
            state = self._states.get(token)

            if state is CallbackState.HANDLED:
                continue

            if state is CallbackState.PENDING:
                logger.warning(
                    f"Circular dependency detected while waiting for {token}"
                )
                raise CircularDependencyError(token)

            if not self._registry.contains(token):
                raise UnknownTokenError(token, "wait_for")

            logger.debug(f"Pulling {token} forward")
            self._invoke_callback(token)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def is_dispatching(self) -> bool:
        return self._is_dispatching

    def is_registered(self, token: str) -> bool:
        return self._registry.contains(token)

    def callback_count(self) -> int:
        return self._registry.count()

    def is_pending(self, token: str) -> bool:
        """True if the callback was invoked in the current (or last) broadcast."""
        return self._states.get(token) in (
            CallbackState.PENDING,
            CallbackState.HANDLED,
        )

    def is_handled(self, token: str) -> bool:
        """True if the callback finished in the current (or last) broadcast."""
        return self._states.get(token) is CallbackState.HANDLED

    @property
    def pending_payload(self) -> Optional[tuple]:
        return self._pending_payload

    # ══════════════════════════════════════════════════════════
    # RESET
    # ══════════════════════════════════════════════════════════

    def reset(self) -> None:
        """
        Clear callbacks and all bookkeeping (testing only).

        Tokens already handed out are never reissued.
        """
        self._registry.clear()
        self._states = {}
        self._pending_payload = None
        self._is_dispatching = False
        logger.debug("Broadcaster reset")

    # ══════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════

    def _invoke_callback(self, token: str) -> None:
        """
        Call one callback with the active payload.

        If the callback raises, its state stays PENDING so that a later
        wait_for() on it in the same chain reports a cycle instead of
        running it twice.
        """
        callback = self._registry.get(token)
        self._states[token] = CallbackState.PENDING

        callback_name = getattr(callback, "__qualname__", str(callback))
        logger.debug(f"Invoking {callback_name} ({token})")

        callback(*self._pending_payload)

        self._states[token] = CallbackState.HANDLED

    def _enter(self, payload: tuple) -> None:
        if self._guard is None:
            self._start_dispatching(payload)
            return
        with self._guard:
            self._start_dispatching(payload)

    def _exit(self) -> None:
        if self._guard is None:
            self._stop_dispatching()
            return
        with self._guard:
            self._stop_dispatching()

    def _start_dispatching(self, payload: tuple) -> None:
        if self._is_dispatching:
            logger.warning("Rejected dispatch while already dispatching")
            raise AlreadyDispatchingError()

        self._states = {
            token: CallbackState.NOT_STARTED
            for token in self._registry.tokens()
        }
        self._pending_payload = payload
        self._is_dispatching = True

    def _stop_dispatching(self) -> None:
        self._pending_payload = None
        self._is_dispatching = False
