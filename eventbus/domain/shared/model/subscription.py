"""Subscription record stored per event name by the subscriptions manager."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SubscriptionInfo:
    """A handler registered for an event name.

    Attributes:
        handler_type: Handler class. Doubles as the handler identity used for
            duplicate detection and removal.
        is_dynamic: True for handlers dispatched by event name with an
            untyped payload, False for handlers bound to an event type.
    """

    handler_type: type[Any]
    is_dynamic: bool

    @classmethod
    def dynamic(cls, handler_type: type[Any]) -> "SubscriptionInfo":
        return cls(handler_type=handler_type, is_dynamic=True)

    @classmethod
    def typed(cls, handler_type: type[Any]) -> "SubscriptionInfo":
        return cls(handler_type=handler_type, is_dynamic=False)

    @property
    def handler_name(self) -> str:
        """Handler class name, for logs and diagnostics."""
        return self.handler_type.__name__
