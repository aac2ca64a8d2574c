"""Error hierarchy for the event bus subscriptions layer.

Error layers:
- EventBusError: Base class for all event bus errors
- DomainError: Registration rule violations, bad arguments (caller bugs)
- InfrastructureError: System-level failures like misconfiguration
"""

from typing import Any


class EventBusError(Exception):
    """Base class for all event bus errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (registration rule violations)
# =============================================================================


class DomainError(EventBusError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class ConflictError(DomainError):
    """Resource already exists."""


class UnknownEventError(NotFoundError):
    """No subscriptions are registered for the event name."""

    def __init__(self, event_name: str) -> None:
        super().__init__(f"No subscriptions registered for '{event_name}'")
        self.event_name = event_name


class DuplicateHandlerError(ConflictError):
    """Handler type already registered for the event name."""

    def __init__(self, event_name: str, handler_type: type[Any]) -> None:
        super().__init__(
            f"Handler Type {handler_type.__name__} already registered for '{event_name}'"
        )
        self.event_name = event_name
        self.handler_type = handler_type


class EventNameCollisionError(ConflictError):
    """Two distinct event types resolve to the same event name."""

    def __init__(self, event_name: str, existing_type: type[Any], new_type: type[Any]) -> None:
        super().__init__(
            f"Event name '{event_name}' already belongs to "
            f"{existing_type.__module__}.{existing_type.__qualname__}, "
            f"cannot register {new_type.__module__}.{new_type.__qualname__}"
        )
        self.event_name = event_name
        self.existing_type = existing_type
        self.new_type = new_type


# =============================================================================
# Infrastructure Errors (system-level failures)
# =============================================================================


class InfrastructureError(EventBusError):
    """Base class for infrastructure/system errors."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
