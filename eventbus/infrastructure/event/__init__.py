"""Event infrastructure - subscriptions manager and startup registration.

Import modules directly:
    from eventbus.infrastructure.event.in_memory_subscriptions import InMemorySubscriptionsManager
    from eventbus.infrastructure.event.registration import register_handlers
"""

__all__: list[str] = []
