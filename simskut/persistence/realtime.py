"""Change feed implementations.

Postgres triggers publish committed row changes with NOTIFY on a single
channel; the listener fans them out to in-process subscribers.
"""

import asyncio
import json

import asyncpg
import logfire

from simskut.domain.service.realtime import ChangeEvent, ChangeFeed

CHANGE_CHANNEL = "table_changes"


class PostgresChangeFeed(ChangeFeed):
    """Change feed over asyncpg LISTEN/NOTIFY.

    Payloads are JSON objects: {"table": ..., "event": ..., "record": {...}}.
    """

    def __init__(self, dsn: str, channel: str = CHANGE_CHANNEL) -> None:
        """Initialize change feed.

        Args:
            dsn: Plain postgresql:// DSN for the listener connection
            channel: NOTIFY channel name
        """
        super().__init__()
        self.dsn = dsn
        self.channel = channel
        self._connection: asyncpg.Connection | None = None
        self._tasks: set[asyncio.Task] = set()

    async def start(self) -> None:
        """Open the listener connection."""
        if self._connection is not None:
            return
        self._connection = await asyncpg.connect(self.dsn)
        await self._connection.add_listener(self.channel, self._on_notify)
        logfire.info("Change feed listening", channel=self.channel)

    async def stop(self) -> None:
        """Close the listener connection and wait for in-flight deliveries."""
        if self._connection is None:
            return
        await self._connection.remove_listener(self.channel, self._on_notify)
        await self._connection.close()
        self._connection = None
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        logfire.info("Change feed stopped", channel=self.channel)

    def _on_notify(self, connection, pid, channel, payload) -> None:
        try:
            data = json.loads(payload)
            change = ChangeEvent(
                table=data["table"], event=data["event"], record=data.get("record") or {}
            )
        except (ValueError, KeyError) as e:
            logfire.warn("Malformed change notification", error=str(e))
            return
        task = asyncio.create_task(self.deliver(change))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def publish(self, change: ChangeEvent) -> None:
        """Send a change through NOTIFY; listeners receive it after commit."""
        if self._connection is None:
            await self.start()
        payload = json.dumps(change.model_dump(mode="json"))
        await self._connection.execute("SELECT pg_notify($1, $2)", self.channel, payload)


class InMemoryChangeFeed(ChangeFeed):
    """Change feed delivering synchronously within the process, for tests."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[ChangeEvent] = []

    async def publish(self, change: ChangeEvent) -> None:
        """Record the change and deliver it to subscribers immediately."""
        self.published.append(change)
        await self.deliver(change)
