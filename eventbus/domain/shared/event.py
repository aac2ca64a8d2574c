"""Integration events and the handler base classes subscribed to them."""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import (
    Any,
    ClassVar,
    Generic,
    TypeVar,
    dataclass_transform,
    get_args,
    get_origin,
)
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

E = TypeVar("E", bound="IntegrationEvent")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class IntegrationEvent(BaseModel):
    """Base class for events exchanged over the bus.

    The event name used as the subscription key defaults to the class name.
    Set ``__event_name__`` on a subclass to publish under a different name;
    the override applies to that class only.
    """

    id: UUID = Field(default_factory=uuid4)
    creation_date: datetime = Field(default_factory=_utc_now)

    __event_name__: ClassVar[str | None] = None


def get_event_key(event_type: type[IntegrationEvent]) -> str:
    """Return the canonical event name for an event type.

    ``__event_name__`` is not inherited: a subclass of a renamed event gets
    its own class name unless it sets ``__event_name__`` itself.
    """
    return vars(event_type).get("__event_name__") or event_type.__name__


# --- Handlers ---


def _extract_event_type(cls: type) -> type[IntegrationEvent] | None:
    """Extract the event type E from IntegrationEventHandler[E] in class bases."""
    for base in getattr(cls, "__orig_bases__", []):
        origin = get_origin(base)
        origin_name = getattr(origin, "__name__", None)
        if origin is not None and origin_name == "IntegrationEventHandler":
            args = get_args(base)
            if args and isinstance(args[0], type) and issubclass(args[0], IntegrationEvent):
                return args[0]
    return None


@dataclass_transform()
class _HandlerMeta(ABCMeta):
    """Metaclass that applies @dataclass and extracts __event_type__ from IntegrationEventHandler[E]."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]) -> type:
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)
            event_type = _extract_event_type(cls)
            if event_type is not None:
                cls.__event_type__ = event_type
        return cls


class IntegrationEventHandler(Generic[E], metaclass=_HandlerMeta):
    """Base class for handlers bound to a specific event type.

    Subclasses are automatically dataclasses, so dependencies are declared
    as fields. The __event_type__ is extracted from the generic parameter
    and is what the subscriptions manager checks a typed registration
    against.

    Example:
        class SendWelcomeEmail(IntegrationEventHandler[UserRegistered]):
            mailer: Mailer

            async def handle(self, event: UserRegistered) -> None:
                await self.mailer.send(event.email, "Welcome!")
    """

    __event_type__: ClassVar[type[IntegrationEvent]]

    @abstractmethod
    async def handle(self, event: E) -> None:
        """Handle a single event."""
        ...


class DynamicIntegrationEventHandler(metaclass=_HandlerMeta):
    """Base class for handlers subscribed by event name only.

    The payload type is unknown to the bus, so the handler receives the
    decoded event body as a plain mapping.
    """

    @abstractmethod
    async def handle(self, event_data: dict[str, Any]) -> None:
        """Handle a decoded event payload."""
        ...
