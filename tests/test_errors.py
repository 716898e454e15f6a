import pytest

from seamlog.errors import (
    BatchError,
    ConflictWriteError,
    DataError,
    DataTypeMismatchError,
    InternalError,
    ShardNotFoundError,
    StoreError,
    TimestampMismatchError,
)


def test_shard_not_found_without_id():
    err = ShardNotFoundError(b"\x01\x02", 0)
    assert str(err) == "find no shard for key [1, 2]"


def test_shard_not_found_with_id():
    err = ShardNotFoundError(b"\x01", 5)
    assert str(err).startswith("can not find shard 5 for key")
    assert err.shard_id == 5


def test_conflict_write_timestamp():
    err = ConflictWriteError(b"\x01", timestamp="ts1")
    assert str(err).startswith("conflict with write to key")
    assert str(err).endswith("at ts1")


def test_conflict_write_transaction():
    err = ConflictWriteError(b"\x01", txn="txn-a")
    assert str(err).endswith("from txn-a")
    assert err.txn == "txn-a"


def test_conflict_write_needs_exactly_one_transient():
    with pytest.raises(ValueError):
        ConflictWriteError(b"k")
    with pytest.raises(ValueError):
        ConflictWriteError(b"k", timestamp="t", txn="x")


def test_type_mismatch_message():
    err = DataTypeMismatchError(b"\x00", "Int", "Bytes")
    assert str(err) == "expect key [0] has type Int, but get Bytes"


def test_timestamp_mismatch_message():
    err = TimestampMismatchError(b"\x03", "ts9")
    assert str(err).startswith("key")
    assert str(err).endswith("get overwritten at timestamp ts9")


@pytest.mark.parametrize("cls", [StoreError, InternalError])
def test_message_errors(cls):
    err = cls("boom")
    assert str(err) == "boom"
    assert isinstance(err, DataError)


def test_batch_error_without_index():
    err = BatchError(InternalError("boom"))
    assert str(err) == "batch request failed due to boom"
    assert err.request_index is None


def test_batch_error_with_index():
    err = BatchError(StoreError("boom"), request_index=3)
    assert str(err) == "3th request in batch failed due to boom"


def test_batch_error_with_message():
    err = BatchError.with_message("oops")
    assert isinstance(err.error, InternalError)
    assert err.error.message == "oops"
    assert str(err).endswith("due to oops")


def test_data_errors_are_raisable():
    err = ShardNotFoundError(b"k")
    assert err.shard_id == 0
    assert str(err) == "find no shard for key [107]"
    with pytest.raises(DataError) as info:
        raise err
    assert info.value is err