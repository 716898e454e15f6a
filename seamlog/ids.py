"""Identifiers: 128-bit UUIDs and tablet/shard ids."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import ClassVar

_U64_MAX = (1 << 64) - 1


def _check_u64(value: int, what: str) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{what} out of unsigned 64-bit range: {value}")


@dataclass(frozen=True, order=True)
class Uuid:
    """128-bit identifier stored as most and least significant halves."""

    msb: int = 0
    lsb: int = 0

    def __post_init__(self) -> None:
        _check_u64(self.msb, "uuid msb")
        _check_u64(self.lsb, "uuid lsb")

    @classmethod
    def nil(cls) -> Uuid:
        return cls(0, 0)

    @classmethod
    def max(cls) -> Uuid:
        return cls(_U64_MAX, _U64_MAX)

    @classmethod
    def new_random(cls) -> Uuid:
        value = uuid.uuid4().int
        return cls(value >> 64, value & _U64_MAX)

    def is_nil(self) -> bool:
        return self.msb == 0 and self.lsb == 0

    def xor(self, other: Uuid) -> Uuid:
        """Self if both are equal, otherwise the max id as a conflict marker."""
        return self if self == other else Uuid.max()

    def normalize(self) -> Uuid:
        """Map the max id back to nil."""
        return Uuid.nil() if self == Uuid.max() else self

    def __str__(self) -> str:
        return str(uuid.UUID(int=(self.msb << 64) | self.lsb))

    def __repr__(self) -> str:
        return f"Uuid({self})"


class _HexId(int):
    """Unsigned 64-bit id shown in hexadecimal."""

    def __new__(cls, value: int = 0):
        value = int(value)
        _check_u64(value, cls.__name__)
        return super().__new__(cls, value)

    def __str__(self) -> str:
        return hex(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({hex(self)})"


class TabletId(_HexId):
    """Identifier of a tablet."""

    ROOT: ClassVar[TabletId]


class ShardId(_HexId):
    """Identifier of a shard."""

    ROOT: ClassVar[ShardId]
    DESCRIPTOR: ClassVar[ShardId]
    DEPLOYMENT: ClassVar[ShardId]


TabletId.ROOT = TabletId(1)
ShardId.ROOT = ShardId(1)
ShardId.DESCRIPTOR = ShardId(2)
ShardId.DEPLOYMENT = ShardId(3)