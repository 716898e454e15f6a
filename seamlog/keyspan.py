"""Key ranges and key spans with their ordering relations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


def _cmp(left: bytes, right: bytes) -> int:
    return (left > right) - (left < right)


@dataclass
class KeyRange:
    """Half-open range of keys ``[start, end)``."""

    start: bytes = b""
    end: bytes = b""

    def __post_init__(self) -> None:
        self.start = bytes(self.start)
        self.end = bytes(self.end)

    def contains(self, key: bytes) -> bool:
        """Whether ``key`` lies within this range."""
        return self.start <= key < self.end

    def is_intersect_with(self, other: KeyRange) -> bool:
        """Whether this range shares any key with ``other``."""
        return not (self.end <= other.start or other.end <= self.start)

    def compare(self, key: bytes) -> int:
        """Order this range against ``key``: -1 if below it, 1 if above it, 0 if containing it."""
        if self.end <= key:
            return -1
        if key < self.start:
            return 1
        return 0

    def resume_from(self, end: bytes) -> bytes:
        """Key to resume from when a request reaching ``end`` is cut at this range's end."""
        if self.end < end:
            return self.end
        return b""


class SpanOrdering(Enum):
    """Relation of one key span to another."""

    LESS_DISJOINT = "less_disjoint"
    LESS_CONTIGUOUS = "less_contiguous"
    GREATER_DISJOINT = "greater_disjoint"
    GREATER_CONTIGUOUS = "greater_contiguous"
    EQUAL = "equal"
    INTERSECT_LEFT = "intersect_left"
    INTERSECT_RIGHT = "intersect_right"
    CONTAIN_RIGHT = "contain_right"
    CONTAIN_LEFT = "contain_left"
    CONTAIN_ALL = "contain_all"
    SUBSET_ALL = "subset_all"
    SUBSET_RIGHT = "subset_right"
    SUBSET_LEFT = "subset_left"

    def reverse(self) -> SpanOrdering:
        """The relation seen from the other span."""
        return _REVERSED[self]


_REVERSED = {
    SpanOrdering.LESS_DISJOINT: SpanOrdering.GREATER_DISJOINT,
    SpanOrdering.LESS_CONTIGUOUS: SpanOrdering.GREATER_CONTIGUOUS,
    SpanOrdering.GREATER_DISJOINT: SpanOrdering.LESS_DISJOINT,
    SpanOrdering.GREATER_CONTIGUOUS: SpanOrdering.LESS_CONTIGUOUS,
    SpanOrdering.EQUAL: SpanOrdering.EQUAL,
    SpanOrdering.INTERSECT_LEFT: SpanOrdering.INTERSECT_RIGHT,
    SpanOrdering.INTERSECT_RIGHT: SpanOrdering.INTERSECT_LEFT,
    SpanOrdering.CONTAIN_RIGHT: SpanOrdering.SUBSET_RIGHT,
    SpanOrdering.CONTAIN_LEFT: SpanOrdering.SUBSET_LEFT,
    SpanOrdering.CONTAIN_ALL: SpanOrdering.SUBSET_ALL,
    SpanOrdering.SUBSET_RIGHT: SpanOrdering.CONTAIN_RIGHT,
    SpanOrdering.SUBSET_LEFT: SpanOrdering.CONTAIN_LEFT,
    SpanOrdering.SUBSET_ALL: SpanOrdering.CONTAIN_ALL,
}

_SIMPLE = {
    -1: SpanOrdering.LESS_DISJOINT,
    0: SpanOrdering.EQUAL,
    1: SpanOrdering.GREATER_DISJOINT,
}

# Overlapping ranges, keyed by (start vs other start, end vs other end).
_OVERLAP = {
    (-1, -1): SpanOrdering.INTERSECT_RIGHT,
    (-1, 0): SpanOrdering.CONTAIN_RIGHT,
    (-1, 1): SpanOrdering.CONTAIN_ALL,
    (0, 0): SpanOrdering.EQUAL,
    (0, -1): SpanOrdering.SUBSET_LEFT,
    (0, 1): SpanOrdering.CONTAIN_LEFT,
    (1, 1): SpanOrdering.INTERSECT_LEFT,
    (1, 0): SpanOrdering.SUBSET_RIGHT,
    (1, -1): SpanOrdering.SUBSET_ALL,
}


@dataclass
class KeySpan:
    """A single key (empty ``end``) or a half-open range ``[key, end)``."""

    key: bytes = b""
    end: bytes = b""

    def __post_init__(self) -> None:
        self.key = bytes(self.key)
        self.end = bytes(self.end)

    @classmethod
    def from_key(cls, key: bytes) -> KeySpan:
        return cls(key, b"")

    @classmethod
    def from_range(cls, key: bytes, end: bytes) -> KeySpan:
        return cls(key, end)

    @classmethod
    def from_key_range(cls, key_range: KeyRange) -> KeySpan:
        return cls(key_range.start, key_range.end)

    def is_single(self) -> bool:
        """Whether this span covers exactly one key."""
        return not self.end

    def end_key(self) -> bytes:
        """The last bound of the span: ``end`` for ranges, ``key`` for single keys."""
        return self.end if self.end else self.key

    def exclusive_end(self) -> bytes:
        """Exclusive end bound; for a single key that is the key followed by a zero byte."""
        return self.end if self.end else self.key + b"\x00"

    def is_before(self, key: bytes) -> bool:
        """Whether the whole span lies before ``key``."""
        if not self.end:
            return key > self.key
        return key >= self.end

    def extend_start(self, start: bytes) -> bool:
        """Move the start down to ``start`` if it is lower; return whether it moved."""
        if start < self.key:
            self.key = bytes(start)
            return True
        return False

    def compare(self, other: KeySpan) -> SpanOrdering:
        """Relation of this span to ``other``."""
        if self.is_single():
            if other.is_single():
                return _SIMPLE[_cmp(self.key, other.key)]
            ordering = _cmp(self.key, other.key)
            if ordering < 0:
                return SpanOrdering.LESS_DISJOINT
            if ordering == 0:
                return SpanOrdering.SUBSET_LEFT
            ordering = _cmp(self.key, other.end)
            if ordering < 0:
                return SpanOrdering.SUBSET_ALL
            if ordering == 0:
                return SpanOrdering.GREATER_CONTIGUOUS
            return SpanOrdering.GREATER_DISJOINT
        if other.is_single():
            return other.compare(self).reverse()
        ordering = _cmp(self.end, other.key)
        if ordering < 0:
            return SpanOrdering.LESS_DISJOINT
        if ordering == 0:
            return SpanOrdering.LESS_CONTIGUOUS
        ordering = _cmp(self.key, other.end)
        if ordering == 0:
            return SpanOrdering.GREATER_CONTIGUOUS
        if ordering > 0:
            return SpanOrdering.GREATER_DISJOINT
        return _OVERLAP[(_cmp(self.key, other.key), _cmp(self.end, other.end))]