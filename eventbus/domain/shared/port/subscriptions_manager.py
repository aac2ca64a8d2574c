from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable

from eventbus.domain.shared.event import (
    DynamicIntegrationEventHandler,
    IntegrationEvent,
    IntegrationEventHandler,
)
from eventbus.domain.shared.model.subscription import SubscriptionInfo
from eventbus.domain.shared.signal import Signal


@runtime_checkable
class SubscriptionsManager(Protocol):
    """Registry of the handlers a bus dispatches each event name to."""

    on_event_removed: Signal[str]

    @property
    @abstractmethod
    def is_empty(self) -> bool: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def add_subscription(
        self,
        event_type: type[IntegrationEvent],
        handler_type: type[IntegrationEventHandler[Any]],
    ) -> None: ...

    @abstractmethod
    def add_dynamic_subscription(
        self,
        event_name: str,
        handler_type: type[DynamicIntegrationEventHandler],
    ) -> None: ...

    @abstractmethod
    def remove_subscription(
        self,
        event_type: type[IntegrationEvent],
        handler_type: type[IntegrationEventHandler[Any]],
    ) -> None: ...

    @abstractmethod
    def remove_dynamic_subscription(
        self,
        event_name: str,
        handler_type: type[DynamicIntegrationEventHandler],
    ) -> None: ...

    @abstractmethod
    def has_subscriptions_for(self, event_type: type[IntegrationEvent]) -> bool: ...

    @abstractmethod
    def has_subscriptions_for_event(self, event_name: str) -> bool: ...

    @abstractmethod
    def get_event_type_by_name(self, event_name: str) -> type[IntegrationEvent] | None: ...

    @abstractmethod
    def get_handlers_for(
        self, event_type: type[IntegrationEvent]
    ) -> tuple[SubscriptionInfo, ...]: ...

    @abstractmethod
    def get_handlers_for_event(self, event_name: str) -> tuple[SubscriptionInfo, ...]: ...

    @abstractmethod
    def get_event_key(self, event_type: type[IntegrationEvent]) -> str: ...
