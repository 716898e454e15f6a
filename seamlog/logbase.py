"""Log addresses, positions and the interfaces of log clients."""

from __future__ import annotations

import abc
import functools
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

_U64_MAX = (1 << 64) - 1
_U128_MAX = (1 << 128) - 1

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_U64_TEXT_RE = re.compile(r"\+?[0-9]+")


def _split_endpoint(endpoint: str) -> tuple[str, str]:
    scheme, sep, address = str(endpoint).partition("://")
    if not sep:
        raise ValueError(f"endpoint expect scheme: {endpoint}")
    if not _SCHEME_RE.fullmatch(scheme):
        raise ValueError(f"endpoint invalid scheme: {endpoint}")
    if not address:
        raise ValueError(f"endpoint expect address: {endpoint}")
    if "/" in address or "?" in address:
        raise ValueError(f"endpoint invalid address: {endpoint}")
    if any(not server for server in address.split(",")):
        raise ValueError(f"endpoint has empty server: {endpoint}")
    return scheme, address


def endpoint_scheme(endpoint: str) -> str:
    """Scheme of an endpoint such as ``kafka://host:9092``."""
    return _split_endpoint(endpoint)[0]


def endpoint_address(endpoint: str) -> str:
    """Address part of an endpoint, the text after ``://``."""
    return _split_endpoint(endpoint)[1]


def endpoint_servers(endpoint: str) -> list[str]:
    """One single-server endpoint for each comma separated server of ``endpoint``."""
    scheme, address = _split_endpoint(endpoint)
    return [f"{scheme}://{server}" for server in address.split(",")]


class LogAddress(str):
    """Address of a log: an endpoint followed by ``/`` and the log name."""

    __slots__ = ()

    def __new__(cls, text: str) -> LogAddress:
        text = str(text)
        scheme, sep, rest = text.partition("://")
        if not sep:
            raise ValueError(f"log address expect scheme: {text}")
        endpoint, slash, name = rest.partition("/")
        if not slash:
            raise ValueError(f"log address expect path: {text}")
        if not name or "/" in name:
            raise ValueError(f"log address invalid log name: {text}")
        _split_endpoint(f"{scheme}://{endpoint}")
        return super().__new__(cls, text)

    def _parts(self) -> tuple[str, str]:
        endpoint, _, name = self.rpartition("/")
        return endpoint, name

    def endpoint(self) -> str:
        """The endpoint the log lives on."""
        return self._parts()[0]

    def name(self) -> str:
        """The name of the log."""
        return self._parts()[1]

    def __repr__(self) -> str:
        return f"LogAddress({str.__repr__(self)})"


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class LogPosition:
    """Absolute position in a log: a numeric offset or an opaque cursor."""

    value: int | str = 0

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise TypeError(f"log position must be int or str, got {value!r}")
        if isinstance(value, int) and not 0 <= value <= _U128_MAX:
            raise ValueError(f"log offset out of range: {value}")

    @property
    def is_offset(self) -> bool:
        return isinstance(self.value, int)

    def as_int(self) -> int | None:
        """The position as an unsigned 64-bit integer, or ``None`` if it is not one."""
        if isinstance(self.value, int):
            return self.value if self.value <= _U64_MAX else None
        if not _U64_TEXT_RE.fullmatch(self.value):
            return None
        number = int(self.value)
        return number if number <= _U64_MAX else None

    def is_next_of(self, previous: LogPosition) -> bool:
        """Whether this position directly follows ``previous``."""
        current = self.as_int()
        before = previous.as_int()
        if current is None or before is None:
            return False
        return before + 1 == current

    def _sort_key(self) -> tuple[int, int | str]:
        return (0, self.value) if isinstance(self.value, int) else (1, self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogPosition):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return str(self.value)


class OffsetKind(Enum):
    """Kind of a relative log offset."""

    EARLIEST = "earliest"
    LATEST = "latest"
    POSITION = "position"


@dataclass(frozen=True)
class LogOffset:
    """Relative position in a log: earliest, latest or an absolute position."""

    kind: OffsetKind
    position: LogPosition | None = None

    def __post_init__(self) -> None:
        if self.kind is OffsetKind.POSITION:
            if not isinstance(self.position, LogPosition):
                raise TypeError("position offset needs a LogPosition")
        elif self.position is not None:
            raise ValueError(f"{self.kind.value} offset takes no position")

    @classmethod
    def earliest(cls) -> LogOffset:
        return cls(OffsetKind.EARLIEST)

    @classmethod
    def latest(cls) -> LogOffset:
        return cls(OffsetKind.LATEST)

    @classmethod
    def at(cls, position: LogPosition | int | str) -> LogOffset:
        if not isinstance(position, LogPosition):
            position = LogPosition(position)
        return cls(OffsetKind.POSITION, position)


class LogProducer(abc.ABC):
    """Writes byte messages to a log."""

    def exclusive(self) -> bool:
        """Whether this producer is the only writer of its log."""
        return False

    @abc.abstractmethod
    def queue(self, payload: bytes) -> None:
        """Queue ``payload`` for sending."""

    @abc.abstractmethod
    async def wait(self) -> LogPosition:
        """Wait for the oldest queued payload to be written and return its position."""

    async def send(self, payload: bytes) -> LogPosition:
        """Queue ``payload`` and wait for it to be written."""
        self.queue(payload)
        return await self.wait()


class LogSubscriber(abc.ABC):
    """Reads byte messages from a log."""

    @abc.abstractmethod
    async def read(self) -> tuple[LogPosition, bytes]:
        """Read the next message and its position, waiting for one if needed."""

    @abc.abstractmethod
    async def seek(self, offset: LogOffset) -> None:
        """Move the read position to ``offset``."""

    @abc.abstractmethod
    async def latest(self) -> LogPosition:
        """Position of the latest message in the log."""


class LogClient(abc.ABC):
    """Client to a log cluster."""

    @abc.abstractmethod
    async def produce_log(self, name: str) -> LogProducer:
        """Open a producer to the log ``name``."""

    @abc.abstractmethod
    async def subscribe_log(self, name: str, offset: LogOffset) -> LogSubscriber:
        """Open a subscriber to the log ``name`` starting at ``offset``."""

    @abc.abstractmethod
    async def create_log(self, name: str, retention: int) -> None:
        """Create the log ``name`` keeping ``retention`` bytes; 0 keeps everything."""

    @abc.abstractmethod
    async def delete_log(self, name: str) -> None:
        """Delete the log ``name``."""


class LogFactory(abc.ABC):
    """Opens log clients for endpoints of one scheme."""

    @abc.abstractmethod
    def scheme(self) -> str:
        """The endpoint scheme this factory serves."""

    @abc.abstractmethod
    async def open_client(self, endpoint: str, params: Mapping[str, str]) -> LogClient:
        """Open a client to ``endpoint`` configured by ``params``."""