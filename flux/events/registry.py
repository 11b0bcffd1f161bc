"""
Flux Events: Callback Registry
================================
Maps tokens to callbacks.

Rules:
- Tokens are minted from a strictly increasing counter
- A token is never handed out twice, even after remove() or clear()
- Iteration order is registration order
- In-memory only (no DB, no files)
"""

import logging
from typing import Callable, Optional

from flux.events.config import BroadcasterConfig
from flux.events.errors import InvalidCallbackError, UnknownTokenError

logger = logging.getLogger("flux.events")


class CallbackRegistry:
    """
    In-memory, insertion-ordered registry of callbacks.

    Owned by exactly one Broadcaster.
    """

    def __init__(self, config: Optional[BroadcasterConfig] = None):
        self._config = config or BroadcasterConfig()
        self._callbacks: dict[str, Callable] = {}
        self._next_id: int = self._config.first_token

    def _mint_token(self) -> str:
        token = f"{self._config.token_prefix}{self._next_id}"
        self._next_id += 1
        return token

    def add(self, callback: Callable) -> str:
        """
        Store a callback under a fresh token.

        Raises:
            InvalidCallbackError: callback is not callable
        """
        if not callable(callback):
            raise InvalidCallbackError(callback)

        token = self._mint_token()
        self._callbacks[token] = callback

        callback_name = getattr(callback, "__qualname__", str(callback))
        logger.debug(f"Callback registered: {callback_name} as {token}")
        return token

    def remove(self, token: str) -> None:
        """
        Remove the callback stored under token.

        Raises:
            UnknownTokenError: token is not registered
        """
        if token not in self._callbacks:
            raise UnknownTokenError(token, "unregister")

        del self._callbacks[token]
        logger.debug(f"Callback unregistered: {token}")

    def get(self, token: str) -> Optional[Callable]:
        return self._callbacks.get(token)

    def contains(self, token: str) -> bool:
        return token in self._callbacks

    def tokens(self) -> tuple[str, ...]:
        """Snapshot of registered tokens in registration order."""
        return tuple(self._callbacks)

    def count(self) -> int:
        return len(self._callbacks)

    def clear(self) -> None:
        """Drop every callback. The token counter keeps counting."""
        self._callbacks.clear()
