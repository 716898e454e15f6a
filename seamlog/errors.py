"""Errors raised by data operations and batches."""

from __future__ import annotations

from typing import Any


def _fmt_key(key: bytes) -> str:
    return str(list(key))


def _fmt_kind(kind: Any) -> str:
    return str(getattr(kind, "name", kind))


class DataError(Exception):
    """Base of all errors reported for a data request."""


class ConflictWriteError(DataError):
    """A write conflicts with a write at a timestamp or from a transaction."""

    def __init__(self, key: bytes, *, timestamp: Any = None, txn: Any = None) -> None:
        if (timestamp is None) == (txn is None):
            raise ValueError("exactly one of timestamp and txn must be given")
        self.key = bytes(key)
        self.timestamp = timestamp
        self.txn = txn
        if txn is None:
            message = f"conflict with write to key {_fmt_key(self.key)} at {timestamp}"
        else:
            message = f"conflict with write to key {_fmt_key(self.key)} from {txn}"
        super().__init__(message)


class DataTypeMismatchError(DataError):
    """A key holds a value of another type than expected."""

    def __init__(self, key: bytes, expect: Any, actual: Any) -> None:
        self.key = bytes(key)
        self.expect = expect
        self.actual = actual
        super().__init__(
            f"expect key {_fmt_key(self.key)} has type {_fmt_kind(expect)}, "
            f"but get {_fmt_kind(actual)}"
        )


class ShardNotFoundError(DataError):
    """No shard, or not the given shard, serves a key."""

    def __init__(self, key: bytes, shard_id: int = 0) -> None:
        self.key = bytes(key)
        self.shard_id = int(shard_id)
        if self.shard_id == 0:
            message = f"find no shard for key {_fmt_key(self.key)}"
        else:
            message = f"can not find shard {self.shard_id} for key {_fmt_key(self.key)}"
        super().__init__(message)


class TimestampMismatchError(DataError):
    """A key was overwritten at another timestamp than expected."""

    def __init__(self, key: bytes, actual: Any) -> None:
        self.key = bytes(key)
        self.actual = actual
        super().__init__(f"key {_fmt_key(self.key)} get overwritten at timestamp {actual}")


class StoreError(DataError):
    """Failure of the underlying store."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InternalError(DataError):
    """Any other failure, described by its message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BatchError(Exception):
    """Failure of a batch, optionally pinned to one request in it."""

    def __init__(self, error: DataError, request_index: int | None = None) -> None:
        self.error = error
        self.request_index = request_index
        if request_index is None:
            message = f"batch request failed due to {error}"
        else:
            message = f"{request_index}th request in batch failed due to {error}"
        super().__init__(message)

    @classmethod
    def with_message(cls, message: str) -> BatchError:
        """A batch failure caused by an internal error with ``message``."""
        return cls(InternalError(message))