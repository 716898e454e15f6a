"""In-process log implementation kept entirely in memory."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field

from .logbase import (
    LogClient,
    LogFactory,
    LogOffset,
    LogPosition,
    LogProducer,
    LogSubscriber,
    OffsetKind,
    endpoint_address,
    endpoint_scheme,
)

_DEFAULT_RETENTION_TIMEOUT = 5.0


@dataclass
class _LogContent:
    """Messages of one log with the bookkeeping for size based retention."""

    retention: float
    retention_timeout: float
    size: int = 0
    start: int = 0
    earliest: int = 0
    expiration: float | None = None
    messages: deque[bytes] = field(default_factory=deque)

    def check_retention(self) -> None:
        now = time.monotonic()
        if self.expiration is not None and self.expiration <= now:
            self.expiration = None
            while self.start < self.earliest:
                self.messages.popleft()
                self.start += 1
        while self.size > self.retention:
            self.size -= len(self.messages[self.earliest - self.start])
            self.earliest += 1
        if self.earliest != self.start and self.expiration is None:
            self.expiration = now + self.retention_timeout


class _MemoryLog:
    """A single log with waiters notified on every append."""

    def __init__(self, retention: int, retention_timeout: float) -> None:
        limit = float("inf") if retention == 0 else retention
        self._content = _LogContent(retention=limit, retention_timeout=retention_timeout)
        self._more = asyncio.Event()

    def offsets(self) -> tuple[int, int]:
        """The earliest and latest readable positions."""
        content = self._content
        end = content.start + len(content.messages)
        latest = end - 1 if end > 0 else 0
        return content.earliest, latest

    def read(self, position: int) -> bytes | asyncio.Event:
        """The message at ``position`` or an event set once more messages arrive."""
        content = self._content
        if position < content.start:
            raise ValueError("read position out of range")
        index = position - content.start
        if index >= len(content.messages):
            return self._more
        return content.messages[index]

    def append(self, message: bytes) -> LogPosition:
        content = self._content
        position = content.start + len(content.messages)
        content.size += len(message)
        content.messages.append(bytes(message))
        content.check_retention()
        waiters, self._more = self._more, asyncio.Event()
        waiters.set()
        return LogPosition(position)


class _MemoryLogProducer(LogProducer):
    def __init__(self, log: _MemoryLog) -> None:
        self._log = log
        self._queue: deque[bytes] = deque()

    def queue(self, payload: bytes) -> None:
        self._queue.append(bytes(payload))

    async def wait(self) -> LogPosition:
        if self._queue:
            return self._log.append(self._queue.popleft())
        # Nothing queued: nothing will ever complete.
        await asyncio.get_running_loop().create_future()
        raise AssertionError("unreachable")

    def __repr__(self) -> str:
        return f"MemoryLogProducer(queued={len(self._queue)})"


class _MemoryLogSubscriber(LogSubscriber):
    def __init__(self, log: _MemoryLog) -> None:
        self._log = log
        self._offset = 0

    async def read(self) -> tuple[LogPosition, bytes]:
        while True:
            found = self._log.read(self._offset)
            if isinstance(found, bytes):
                position = LogPosition(self._offset)
                self._offset += 1
                return position, found
            await found.wait()

    async def seek(self, offset: LogOffset) -> None:
        earliest, latest = self._log.offsets()
        if offset.kind is OffsetKind.EARLIEST:
            self._offset = earliest
        elif offset.kind is OffsetKind.LATEST:
            self._offset = latest
        else:
            position = offset.position.as_int()
            if position is None:
                raise ValueError(f"invalid position {offset.position}")
            if position < earliest or position > latest:
                raise ValueError("position out of range")
            self._offset = position

    async def latest(self) -> LogPosition:
        _, latest = self._log.offsets()
        return LogPosition(latest)

    def __repr__(self) -> str:
        return f"MemoryLogSubscriber(offset={self._offset})"


class _MemoryLogClient(LogClient):
    def __init__(self, retention_timeout: float) -> None:
        self._retention_timeout = retention_timeout
        self._logs: dict[str, _MemoryLog] = {}

    def _get_log(self, name: str) -> _MemoryLog:
        try:
            return self._logs[name]
        except KeyError:
            raise LookupError(f"no log named {name}") from None

    async def produce_log(self, name: str) -> LogProducer:
        return _MemoryLogProducer(self._get_log(name))

    async def subscribe_log(self, name: str, offset: LogOffset) -> LogSubscriber:
        subscriber = _MemoryLogSubscriber(self._get_log(name))
        await subscriber.seek(offset)
        return subscriber

    async def create_log(self, name: str, retention: int) -> None:
        if name in self._logs:
            raise ValueError(f"log {name} already exists")
        self._logs[name] = _MemoryLog(retention, self._retention_timeout)

    async def delete_log(self, name: str) -> None:
        self._logs.pop(name, None)

    def __repr__(self) -> str:
        return f"MemoryLogClient(logs={sorted(self._logs)})"


class MemoryLogFactory(LogFactory):
    """Factory handing out one shared in-memory client for ``memory://memory``."""

    ENDPOINT = "memory://memory"

    def __init__(self, retention_timeout: float = _DEFAULT_RETENTION_TIMEOUT) -> None:
        self._client = _MemoryLogClient(retention_timeout)

    def scheme(self) -> str:
        return "memory"

    async def open_client(self, endpoint: str, params: Mapping[str, str]) -> LogClient:
        scheme = endpoint_scheme(endpoint)
        if scheme != "memory":
            raise ValueError(f'invalid scheme: expect "memory", got "{scheme}"')
        address = endpoint_address(endpoint)
        if address != "memory":
            raise ValueError(f'invalid address: expect "memory", got "{address}"')
        return self._client

    def __repr__(self) -> str:
        return f"MemoryLogFactory({self._client!r})"