# seamlog

Building blocks for the log layer of a distributed key-value database. The package has no runtime dependencies.

## Modules

- `seamlog.keyspan`
  - `KeyRange` is a half-open byte-string range `[start, end)`. It has `contains`, `is_intersect_with`, `compare` and `resume_from`.
  - `KeySpan` is a single key (empty `end`) or a range. It has `from_key`, `from_range`, `from_key_range`, `is_single`, `end_key`, `exclusive_end`, `is_before`, `extend_start` and `compare`.
  - `compare` returns a `SpanOrdering`, such as `LESS_DISJOINT`, `SUBSET_ALL` or `INTERSECT_RIGHT`. `SpanOrdering.reverse()` gives the same relation seen from the other span.
- `seamlog.ids`
  - `Uuid` is a frozen 128-bit id with `msb` and `lsb` halves. It has `nil`, `max`, `new_random`, `is_nil`, `xor` and `normalize`, and prints in the usual hyphenated form.
  - `TabletId` and `ShardId` are unsigned 64-bit ints that print in hex. They come with the constants `TabletId.ROOT`, `ShardId.ROOT`, `ShardId.DESCRIPTOR` and `ShardId.DEPLOYMENT`.
- `seamlog.messages`
  - `MessageId` holds an epoch and a sequence. `MessageId.fenced(epoch)` makes one. `advance(next)` returns `False` for stale ids and `True` when the id moves forward. It raises `ValueError` when a sequence is skipped within an epoch.
  - `TabletDeployment` holds a server list versioned by `(epoch, generation)`. It has `update`, `index`, `order` and `version`.
- `seamlog.errors`
  - `DataError` is the base exception. Its subclasses are `ConflictWriteError`, `DataTypeMismatchError`, `ShardNotFoundError`, `TimestampMismatchError`, `StoreError` and `InternalError`.
  - `BatchError` wraps a `DataError`, with an optional request index. `BatchError.with_message` makes one from plain text.
- `seamlog.logbase`
  - Endpoint helpers: `endpoint_scheme`, `endpoint_address` and `endpoint_servers`. An endpoint looks like `scheme://host1,host2:2222`.
  - `LogAddress` is a `str` subclass of the form `<endpoint>/<name>`, with `endpoint()` and `name()`.
  - `LogPosition` is a numeric offset or a text cursor, with `as_int` and `is_next_of`.
  - `LogOffset` is built with `earliest()`, `latest()` or `at(position)`.
  - The abstract async interfaces are `LogProducer`, `LogSubscriber`, `LogClient` and `LogFactory`.
- `seamlog.memory`
  - `MemoryLogFactory` is an in-process log backend. It serves only the endpoint `memory://memory` (`MemoryLogFactory.ENDPOINT`), and hands out one shared client.
- `seamlog.manager`
  - `LogRegistry` maps schemes to factories. `register` raises `ValueError` if the scheme is already taken.
  - `LogManager` creates logs on its active endpoint and routes a log address to the client that serves the address's endpoint.

## Install

```
pip install .
pip install ".[test]"   # to run the tests
```

## Example

```python
import asyncio

from seamlog.logbase import LogOffset
from seamlog.manager import LogManager
from seamlog.memory import MemoryLogFactory


async def main():
    manager = await LogManager.create(MemoryLogFactory(), "memory://memory", {})
    address = await manager.create_log("events", 0)

    producer = await manager.produce_log(address)
    subscriber = await manager.subscribe_log(address, LogOffset.earliest())

    position = await producer.send(b"hello")
    read_position, payload = await subscriber.read()
    assert read_position == position and payload == b"hello"


asyncio.run(main())
```

### Routing

`LogManager` looks up the client for an address in this order:

1. The active endpoint, or an endpoint opened with `open_client`, when it matches exactly.
2. Otherwise, a client whose multi-server endpoint includes one of the address's servers. If several match, one is picked at random.

When no client matches, it raises `LookupError`.

### Memory backend

- Creating a log that already exists raises `ValueError`.
- Using a log that does not exist raises `LookupError` (`no log named ...`).
- Deleting a log that does not exist does nothing.
- A retention of `0` keeps every message.
- With any other retention, once the total payload size goes over the limit, the earliest readable position moves forward past the oldest messages right away. Those messages are removed from memory on the first append after the factory's `retention_timeout` has passed. The default timeout is 5 seconds.

## Key spans

```python
from seamlog.keyspan import KeySpan, SpanOrdering

assert KeySpan.from_key(b"k1").compare(KeySpan.from_range(b"k0", b"k10")) is SpanOrdering.SUBSET_ALL
```

## What it does not do

- The only log backend is the in-memory one. There is no client for a networked log service.
- Nothing is written to disk.
- There is no command-line tool and no server. The package is a library used from asyncio code.

## Tests

```
pytest
```