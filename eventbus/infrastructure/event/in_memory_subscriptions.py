"""In-memory subscriptions manager.

Keeps the event name → handlers mapping for a single bus instance. Access
must be serialized by the caller (typically the bus's own dispatch loop);
no locking is done here.
"""

import logging
from typing import Any

from eventbus.config import Config
from eventbus.domain.shared.error import (
    DuplicateHandlerError,
    EventNameCollisionError,
    UnknownEventError,
    ValidationError,
)
from eventbus.domain.shared.event import (
    DynamicIntegrationEventHandler,
    IntegrationEvent,
    IntegrationEventHandler,
    get_event_key,
)
from eventbus.domain.shared.model.subscription import SubscriptionInfo
from eventbus.domain.shared.signal import Signal

logger = logging.getLogger(__name__)


def _is_subclass(obj: Any, base: type) -> bool:
    return isinstance(obj, type) and issubclass(obj, base)


class InMemorySubscriptionsManager:
    """Tracks which handler types are subscribed to which event names.

    Typed subscriptions are keyed by the event type's canonical name (see
    ``get_event_key``) and remember the event type so it can be resolved
    back from the name. Dynamic subscriptions are keyed by a caller supplied
    name and carry no event type.

    When the last handler for an event name is removed, the entry is dropped
    and ``on_event_removed`` fires with that name, after the state change.
    Transports use it to unbind from the upstream topic or queue.

    Example:
        manager = InMemorySubscriptionsManager()
        manager.on_event_removed.connect(transport.unbind)

        manager.add_subscription(OrderCreated, ReserveStock)
        manager.add_dynamic_subscription("OrderCreated", AuditTrail)

        if manager.has_subscriptions_for_event("OrderCreated"):
            for subscription in manager.get_handlers_for_event("OrderCreated"):
                ...
    """

    def __init__(self, isolate_listener_errors: bool = True) -> None:
        """Initialize an empty manager.

        Args:
            isolate_listener_errors: Log and continue when an
                ``on_event_removed`` listener raises, instead of propagating.
        """
        self._handlers: dict[str, list[SubscriptionInfo]] = {}
        self._event_types: dict[str, type[IntegrationEvent]] = {}
        self.on_event_removed: Signal[str] = Signal(isolate_errors=isolate_listener_errors)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self._handlers

    @property
    def event_names(self) -> tuple[str, ...]:
        """Registered event names in first-subscription order."""
        return tuple(self._handlers)

    @property
    def event_types(self) -> frozenset[type[IntegrationEvent]]:
        """Event types that currently back at least one typed subscription."""
        return frozenset(self._event_types.values())

    def clear(self) -> None:
        """Drop every subscription without notifying listeners."""
        self._handlers.clear()
        self._event_types.clear()
        logger.debug("Cleared all subscriptions")

    # -------------------------------------------------------------------------
    # Subscribe
    # -------------------------------------------------------------------------

    def add_dynamic_subscription(
        self,
        event_name: str,
        handler_type: type[DynamicIntegrationEventHandler],
    ) -> None:
        """Subscribe a dynamic handler to an event name.

        Raises:
            ValidationError: If the name is empty or the handler is not a
                DynamicIntegrationEventHandler subclass.
            DuplicateHandlerError: If the handler is already subscribed.
        """
        if not event_name:
            raise ValidationError("Event name must not be empty", field="event_name")
        if not _is_subclass(handler_type, DynamicIntegrationEventHandler):
            raise ValidationError(
                f"{handler_type!r} is not a DynamicIntegrationEventHandler",
                field="handler_type",
            )
        self._do_add_subscription(handler_type, event_name, is_dynamic=True)

    def add_subscription(
        self,
        event_type: type[IntegrationEvent],
        handler_type: type[IntegrationEventHandler[Any]],
    ) -> None:
        """Subscribe a typed handler to an event type.

        Raises:
            ValidationError: If the handler is not an IntegrationEventHandler
                for exactly ``event_type``.
            EventNameCollisionError: If another event type already owns the
                same event name.
            DuplicateHandlerError: If the handler is already subscribed.
        """
        if not _is_subclass(event_type, IntegrationEvent):
            raise ValidationError(
                f"{event_type!r} is not an IntegrationEvent", field="event_type"
            )
        if not _is_subclass(handler_type, IntegrationEventHandler):
            raise ValidationError(
                f"{handler_type!r} is not an IntegrationEventHandler", field="handler_type"
            )
        handled = getattr(handler_type, "__event_type__", None)
        if handled is not event_type:
            raise ValidationError(
                f"{handler_type.__name__} handles "
                f"{getattr(handled, '__name__', None)}, not {event_type.__name__}",
                field="handler_type",
            )

        event_name = self.get_event_key(event_type)
        existing = self._event_types.get(event_name)
        if existing is not None and existing is not event_type:
            raise EventNameCollisionError(event_name, existing, event_type)

        self._do_add_subscription(handler_type, event_name, is_dynamic=False)
        self._event_types[event_name] = event_type

    def _do_add_subscription(self, handler_type: type[Any], event_name: str, is_dynamic: bool) -> None:
        handlers = self._handlers.get(event_name, [])
        if any(s.handler_type is handler_type for s in handlers):
            raise DuplicateHandlerError(event_name, handler_type)

        subscription = (
            SubscriptionInfo.dynamic(handler_type)
            if is_dynamic
            else SubscriptionInfo.typed(handler_type)
        )
        self._handlers.setdefault(event_name, []).append(subscription)
        logger.debug(
            "Subscribed %s to '%s' (%s)",
            handler_type.__name__,
            event_name,
            "dynamic" if is_dynamic else "typed",
        )

    # -------------------------------------------------------------------------
    # Unsubscribe
    # -------------------------------------------------------------------------

    def remove_dynamic_subscription(
        self,
        event_name: str,
        handler_type: type[DynamicIntegrationEventHandler],
    ) -> None:
        """Unsubscribe a dynamic handler. Does nothing if it is not subscribed."""
        subscription = self._find_subscription_to_remove(event_name, handler_type, is_dynamic=True)
        self._do_remove_handler(event_name, subscription)

    def remove_subscription(
        self,
        event_type: type[IntegrationEvent],
        handler_type: type[IntegrationEventHandler[Any]],
    ) -> None:
        """Unsubscribe a typed handler. Does nothing if it is not subscribed."""
        event_name = self.get_event_key(event_type)
        if self._event_types.get(event_name) is not event_type:
            return
        subscription = self._find_subscription_to_remove(event_name, handler_type, is_dynamic=False)
        self._do_remove_handler(event_name, subscription)

    def _find_subscription_to_remove(
        self, event_name: str, handler_type: type[Any], is_dynamic: bool
    ) -> SubscriptionInfo | None:
        for subscription in self._handlers.get(event_name, []):
            if subscription.handler_type is handler_type and subscription.is_dynamic == is_dynamic:
                return subscription
        return None

    def _do_remove_handler(self, event_name: str, subscription: SubscriptionInfo | None) -> None:
        if subscription is None:
            return

        handlers = self._handlers[event_name]
        handlers.remove(subscription)
        logger.debug("Unsubscribed %s from '%s'", subscription.handler_name, event_name)

        # Event type is only known while a typed handler backs the name
        if all(s.is_dynamic for s in handlers):
            self._event_types.pop(event_name, None)

        if handlers:
            return

        del self._handlers[event_name]
        logger.info(f"Last handler for '{event_name}' removed")
        self.on_event_removed.emit(event_name)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def has_subscriptions_for(self, event_type: type[IntegrationEvent]) -> bool:
        return self.has_subscriptions_for_event(self.get_event_key(event_type))

    def has_subscriptions_for_event(self, event_name: str) -> bool:
        return event_name in self._handlers

    def get_event_type_by_name(self, event_name: str) -> type[IntegrationEvent] | None:
        """Resolve the event type behind a name, or None for dynamic-only or unknown names."""
        return self._event_types.get(event_name)

    def get_handlers_for(self, event_type: type[IntegrationEvent]) -> tuple[SubscriptionInfo, ...]:
        return self.get_handlers_for_event(self.get_event_key(event_type))

    def get_handlers_for_event(self, event_name: str) -> tuple[SubscriptionInfo, ...]:
        """Return the subscriptions for an event name in registration order.

        Check ``has_subscriptions_for_event`` first; an unregistered name is
        a caller error.

        Raises:
            UnknownEventError: If nothing is subscribed to ``event_name``.
        """
        try:
            return tuple(self._handlers[event_name])
        except KeyError:
            raise UnknownEventError(event_name) from None

    def get_event_key(self, event_type: type[IntegrationEvent]) -> str:
        return get_event_key(event_type)


def create_subscriptions_manager(config: Config | None = None) -> InMemorySubscriptionsManager:
    """Build a manager from the ``subscriptions`` config section."""
    if config is None:
        config = Config()
    return InMemorySubscriptionsManager(
        isolate_listener_errors=config.subscriptions.isolate_listener_errors,
    )
