"""Global test fixtures."""

import pytest

from eventbus.infrastructure.event.in_memory_subscriptions import InMemorySubscriptionsManager


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer EVENTBUS_* settings out of the tests."""
    for var in ("EVENTBUS_CONFIG_FILE", "EVENTBUS_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def manager() -> InMemorySubscriptionsManager:
    return InMemorySubscriptionsManager()
