"""Unit tests for startup handler registration."""

import logging
from typing import Any

import pytest

from eventbus.domain.shared.error import DuplicateHandlerError, ValidationError
from eventbus.domain.shared.event import (
    DynamicIntegrationEventHandler,
    IntegrationEvent,
    IntegrationEventHandler,
)
from eventbus.infrastructure.event.registration import register_handlers


class EventA(IntegrationEvent):
    """Test event A."""


class EventB(IntegrationEvent):
    """Test event B."""


class HandlerForA(IntegrationEventHandler[EventA]):
    async def handle(self, event: EventA) -> None:
        pass


class AnotherHandlerForA(IntegrationEventHandler[EventA]):
    async def handle(self, event: EventA) -> None:
        pass


class HandlerForB(IntegrationEventHandler[EventB]):
    async def handle(self, event: EventB) -> None:
        pass


class AuditTrail(DynamicIntegrationEventHandler):
    async def handle(self, event_data: dict[str, Any]) -> None:
        pass


class TestRegisterHandlers:
    def test_registers_each_handler_under_its_event_type(self, manager):
        register_handlers(manager, [HandlerForA, AnotherHandlerForA, HandlerForB])

        assert [s.handler_type for s in manager.get_handlers_for(EventA)] == [
            HandlerForA,
            AnotherHandlerForA,
        ]
        assert [s.handler_type for s in manager.get_handlers_for(EventB)] == [HandlerForB]
        assert manager.event_types == frozenset({EventA, EventB})

    def test_empty_handler_list(self, manager):
        register_handlers(manager, [])

        assert manager.is_empty

    def test_stops_at_duplicate(self, manager):
        with pytest.raises(DuplicateHandlerError):
            register_handlers(manager, [HandlerForA, HandlerForA, HandlerForB])

        assert manager.event_names == ("EventA",)

    def test_dynamic_handler_is_rejected(self, manager):
        """Handlers without an event type fail with ValidationError."""
        with pytest.raises(ValidationError, match="does not declare an event type") as exc_info:
            register_handlers(manager, [AuditTrail])  # type: ignore[list-item]

        assert exc_info.value.field == "handlers"
        assert manager.is_empty

    def test_handler_without_generic_parameter_is_rejected(self, manager):
        class Untyped(IntegrationEventHandler):  # type: ignore[type-arg]
            async def handle(self, event: Any) -> None:
                pass

        with pytest.raises(ValidationError):
            register_handlers(manager, [Untyped])

        assert manager.is_empty

    def test_logs_summary(self, manager, caplog):
        with caplog.at_level(logging.INFO, logger="eventbus.infrastructure.event.registration"):
            register_handlers(manager, [HandlerForA, AnotherHandlerForA, HandlerForB])

        assert "Registered 3 handlers for 2 event types" in caplog.text
