"""Synchronous observer list."""

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Signal(Generic[T]):
    """Ordered list of callbacks notified synchronously with a single value.

    Listeners run in the order they were connected. With ``isolate_errors``
    (the default) a failing listener is logged and the remaining listeners
    still run; otherwise the first error propagates to the emitter.

    Example:
        removed: Signal[str] = Signal()
        disconnect = removed.connect(lambda name: print(f"{name} gone"))
        removed.emit("OrderCreated")
        disconnect()
    """

    def __init__(self, isolate_errors: bool = True) -> None:
        self._listeners: list[Listener[T]] = []
        self._isolate_errors = isolate_errors

    def connect(self, listener: Listener[T]) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Callable that disconnects the listener again.
        """
        self._listeners.append(listener)

        def disconnect() -> None:
            self.disconnect(listener)

        return disconnect

    def disconnect(self, listener: Listener[T]) -> None:
        """Remove a listener. Unknown listeners are ignored.

        A listener connected more than once loses its most recent entry, so
        the order of the remaining entries is unchanged.
        """
        for index in range(len(self._listeners) - 1, -1, -1):
            if self._listeners[index] == listener:
                del self._listeners[index]
                return

    def emit(self, value: T) -> None:
        """Invoke every listener with ``value``."""
        # Snapshot so listeners may disconnect themselves while being notified
        for listener in list(self._listeners):
            if not self._isolate_errors:
                listener(value)
                continue
            try:
                listener(value)
            except Exception:
                logger.exception(
                    "Listener %s failed for %r",
                    getattr(listener, "__qualname__", repr(listener)),
                    value,
                )

    @property
    def listeners(self) -> tuple[Listener[T], ...]:
        return tuple(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)
