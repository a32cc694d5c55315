"""Change feed interface for realtime row notifications."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

import logfire

from simskut.domain.value.common import ValueObject


class ChangeEvent(ValueObject):
    """One committed row change.

    `record` holds the new row's columns as JSON-compatible values.
    """

    table: str
    event: str  # INSERT, UPDATE or DELETE
    record: dict[str, Any]


ChangeCallback = Callable[[ChangeEvent], Awaitable[None]]


class Subscription:
    """Handle returned by ChangeFeed.subscribe.

    Closing is idempotent. After close the callback is never invoked again.
    """

    def __init__(
        self,
        table: str,
        event: str,
        callback: ChangeCallback,
        on_close: Callable[["Subscription"], None],
    ) -> None:
        self.table = table
        self.event = event
        self.callback = callback
        self._on_close = on_close
        self.closed = False

    def matches(self, change: ChangeEvent) -> bool:
        """Whether this subscription wants the change."""
        return not self.closed and change.table == self.table and change.event == self.event

    def close(self) -> None:
        """Stop receiving changes."""
        if self.closed:
            return
        self.closed = True
        self._on_close(self)


class ChangeFeed(ABC):
    """Publish/subscribe channel of committed row changes."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, table: str, event: str, callback: ChangeCallback) -> Subscription:
        """Register a callback for one table and event kind.

        Args:
            table: Table name, e.g. feed_posts
            event: INSERT, UPDATE or DELETE
            callback: Coroutine function receiving each ChangeEvent

        Returns:
            Subscription handle; close it to stop receiving events
        """
        subscription = Subscription(table, event, callback, self._remove)
        self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        """Number of open subscriptions."""
        return len(self._subscriptions)

    async def deliver(self, change: ChangeEvent) -> None:
        """Invoke every matching subscription in registration order.

        A failing callback is logged and skipped; later subscribers still
        receive the change.
        """
        for subscription in list(self._subscriptions):
            if not subscription.matches(change):
                continue
            try:
                await subscription.callback(change)
            except Exception as e:
                logfire.error(
                    "Change subscriber failed",
                    table=change.table,
                    event=change.event,
                    error=str(e),
                )

    @abstractmethod
    async def publish(self, change: ChangeEvent) -> None:
        """Announce a committed change to subscribers."""
        pass

    async def start(self) -> None:
        """Open any underlying listener connection."""

    async def stop(self) -> None:
        """Release the underlying listener connection."""
