"""
Flux Events: Broadcaster Configuration
========================================
Explicit, frozen construction options for a Broadcaster.

No environment lookups, no files. A host that wants different
options builds a different config and passes it in.
"""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_TOKEN_PREFIX = "ID_"


@dataclass(frozen=True)
class BroadcasterConfig:
    """
    Broadcaster options.

    Fields:
        token_prefix: Prepended to the counter when minting tokens.
        first_token:  First counter value handed out.
        thread_guard: Wrap dispatch entry/exit in a lock so two threads
                      can never hold an active broadcast at once. The
                      losing thread gets AlreadyDispatchingError.
    """

    token_prefix: str = DEFAULT_TOKEN_PREFIX
    first_token: int = 1
    thread_guard: bool = False

    def __post_init__(self):
        if not self.token_prefix or not isinstance(self.token_prefix, str):
            raise ValueError("token_prefix must be a non-empty string.")

        if isinstance(self.first_token, bool) or not isinstance(
            self.first_token, int
        ):
            raise ValueError("first_token must be an integer.")

        if self.first_token < 0:
            raise ValueError("first_token must be >= 0.")

        if not isinstance(self.thread_guard, bool):
            raise ValueError("thread_guard must be a boolean.")
