"""Unit tests for integration events and handler base classes."""

from typing import Any
from uuid import UUID

import pytest

from eventbus.domain.shared.event import (
    DynamicIntegrationEventHandler,
    IntegrationEvent,
    IntegrationEventHandler,
    get_event_key,
)


class OrderCreated(IntegrationEvent):
    """Test event."""

    order_id: str


class RenamedEvent(IntegrationEvent):
    """Test event published under a custom name."""

    __event_name__ = "orders.v2.created"


class TestIntegrationEvent:
    def test_defaults_id_and_creation_date(self):
        """Events get a fresh id and a UTC creation date."""
        first = OrderCreated(order_id="o-1")
        second = OrderCreated(order_id="o-1")

        assert isinstance(first.id, UUID)
        assert first.id != second.id
        assert first.creation_date.tzinfo is not None

    def test_event_name_is_not_a_field(self):
        """__event_name__ is a class setting, not part of the payload."""
        assert "__event_name__" not in RenamedEvent.model_fields
        assert "__event_name__" not in RenamedEvent().model_dump()


class TestGetEventKey:
    def test_defaults_to_class_name(self):
        assert get_event_key(OrderCreated) == "OrderCreated"

    def test_uses_event_name_override(self):
        assert get_event_key(RenamedEvent) == "orders.v2.created"

    def test_override_is_not_inherited(self):
        """A subclass of a renamed event keys on its own class name."""

        class RenamedEventV2(RenamedEvent):
            pass

        assert get_event_key(RenamedEventV2) == "RenamedEventV2"

    def test_is_stable(self):
        """Same type always yields the same key."""
        assert get_event_key(OrderCreated) == get_event_key(OrderCreated)


class TestIntegrationEventHandlerMetaclass:
    """Tests for IntegrationEventHandler metaclass __event_type__ extraction."""

    def test_handler_has_event_type_set(self):
        class MyHandler(IntegrationEventHandler[OrderCreated]):
            async def handle(self, event: OrderCreated) -> None:
                pass

        assert MyHandler.__event_type__ is OrderCreated

    def test_handler_is_dataclass(self):
        """Handler subclasses declare dependencies as dataclass fields."""

        class HandlerWithDeps(IntegrationEventHandler[OrderCreated]):
            some_dep: str

            async def handle(self, event: OrderCreated) -> None:
                pass

        handler = HandlerWithDeps(some_dep="test")
        assert handler.some_dep == "test"

    def test_handler_subclass_inherits_event_type(self):
        class BaseHandler(IntegrationEventHandler[OrderCreated]):
            async def handle(self, event: OrderCreated) -> None:
                pass

        class DerivedHandler(BaseHandler):
            pass

        assert DerivedHandler.__event_type__ is OrderCreated

    def test_handler_must_implement_handle(self):
        class Incomplete(IntegrationEventHandler[OrderCreated]):
            pass

        with pytest.raises(TypeError):
            Incomplete()

    @pytest.mark.asyncio
    async def test_handle_receives_event(self):
        received: list[OrderCreated] = []

        class Recorder(IntegrationEventHandler[OrderCreated]):
            async def handle(self, event: OrderCreated) -> None:
                received.append(event)

        event = OrderCreated(order_id="o-7")
        await Recorder().handle(event)

        assert received == [event]


class TestDynamicIntegrationEventHandler:
    def test_has_no_event_type(self):
        class Audit(DynamicIntegrationEventHandler):
            async def handle(self, event_data: dict[str, Any]) -> None:
                pass

        assert getattr(Audit, "__event_type__", None) is None

    @pytest.mark.asyncio
    async def test_handle_receives_payload(self):
        received: list[dict[str, Any]] = []

        class Audit(DynamicIntegrationEventHandler):
            async def handle(self, event_data: dict[str, Any]) -> None:
                received.append(event_data)

        await Audit().handle({"order_id": "o-1"})

        assert received == [{"order_id": "o-1"}]
