"""Bulk registration of typed handlers at startup."""

import logging
from typing import Any, Iterable

from eventbus.domain.shared.error import ValidationError
from eventbus.domain.shared.event import IntegrationEventHandler
from eventbus.domain.shared.port.subscriptions_manager import SubscriptionsManager

logger = logging.getLogger(__name__)


def register_handlers(
    manager: SubscriptionsManager,
    handlers: Iterable[type[IntegrationEventHandler[Any]]],
) -> None:
    """Subscribe each handler to the event type it declares.

    Maps each handler's ``__event_type__`` to the handler, in list order, so
    handlers listed first are dispatched first. Stops at the first failing
    registration; handlers before it stay registered.

    Raises:
        ValidationError: If a handler does not declare an event type.
    """
    event_names: set[str] = set()
    count = 0
    for handler in handlers:
        event_type = getattr(handler, "__event_type__", None)
        if event_type is None:
            raise ValidationError(f"{handler!r} does not declare an event type", field="handlers")
        manager.add_subscription(event_type, handler)
        event_names.add(manager.get_event_key(event_type))
        count += 1

    logger.info(f"Registered {count} handlers for {len(event_names)} event types")
