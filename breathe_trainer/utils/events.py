"""Synchronous publish/subscribe hook."""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventHook(Generic[T]):
    """A list of handlers invoked in subscription order on the emitting thread.

    Handlers run synchronously; an exception raised by a handler propagates
    to the emitter.
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Callable[[], None]:
        """Register a handler.

        Returns:
            A function that removes the handler again
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def emit(self, payload: T) -> None:
        """Call every handler with ``payload``."""
        logger.debug(f"Emitting {self.name} to {len(self._handlers)} handler(s)")
        for handler in list(self._handlers):
            handler(payload)

    def __len__(self) -> int:
        return len(self._handlers)
