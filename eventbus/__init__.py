"""In-process subscription registry for event bus implementations."""

from eventbus.domain.shared.error import (
    DuplicateHandlerError,
    EventNameCollisionError,
    UnknownEventError,
)
from eventbus.domain.shared.event import (
    DynamicIntegrationEventHandler,
    IntegrationEvent,
    IntegrationEventHandler,
    get_event_key,
)
from eventbus.domain.shared.model.subscription import SubscriptionInfo
from eventbus.infrastructure.event.in_memory_subscriptions import (
    InMemorySubscriptionsManager,
    create_subscriptions_manager,
)

__all__ = [
    "DuplicateHandlerError",
    "DynamicIntegrationEventHandler",
    "EventNameCollisionError",
    "InMemorySubscriptionsManager",
    "IntegrationEvent",
    "IntegrationEventHandler",
    "SubscriptionInfo",
    "UnknownEventError",
    "create_subscriptions_manager",
    "get_event_key",
]
