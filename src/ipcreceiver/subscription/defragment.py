"""Reassembly of chunked IPC messages.

OpenNMS splits large Sink and RPC messages into ordered chunks sharing one
message id. `ChunkDefragmenter` buffers the chunks of every in-flight message
and releases the joined payload once the final chunk arrives.

Duplicates are detected with a per-message watermark (the highest chunk
accepted so far), which tolerates redelivery of any prefix. A lower chunk that
shows up after a higher one is treated as stale and dropped, so the transport
must preserve chunk order within a partition. Entries are only removed on
completion; a message whose last chunk never comes stays buffered.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Protocol, TypeVar

from ..metrics import STALE_CHUNKS
from ._types import Completed, Fragment

R = TypeVar("R")


@dataclass
class _Inflight:
    buffer: bytearray = field(default_factory=bytearray)
    highest_chunk: int = 0


class EntryStore(Protocol):
    """Keyed accumulator: applies an update to one entry atomically."""

    def update(
        self, key: str, fn: Callable[[_Inflight | None], tuple[_Inflight | None, R]]
    ) -> R: ...

    def keys(self) -> list[str]: ...


class LockedEntryStore:
    """All entries behind a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, _Inflight] = {}

    def update(
        self, key: str, fn: Callable[[_Inflight | None], tuple[_Inflight | None, R]]
    ) -> R:
        with self._lock:
            entry, result = fn(self._entries.get(key))
            if entry is None:
                self._entries.pop(key, None)
            else:
                self._entries[key] = entry
            return result

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)


class ShardedEntryStore:
    """Entries spread over several independently locked shards by key hash."""

    def __init__(self, shards: int = 16) -> None:
        if shards < 1:
            raise ValueError("At least one shard must be provided")
        self._shards = [LockedEntryStore() for _ in range(shards)]

    def _shard(self, key: str) -> LockedEntryStore:
        return self._shards[hash(key) % len(self._shards)]

    def update(
        self, key: str, fn: Callable[[_Inflight | None], tuple[_Inflight | None, R]]
    ) -> R:
        return self._shard(key).update(key, fn)

    def keys(self) -> list[str]:
        return [k for shard in self._shards for k in shard.keys()]


class ChunkDefragmenter:
    """Collect chunks by message id and emit the payload when the last one lands."""

    def __init__(self, store: EntryStore | None = None):
        self._store: EntryStore = store if store is not None else LockedEntryStore()
        self._stale = 0
        self._stale_lock = threading.Lock()

    @property
    def stale_count(self) -> int:
        """Number of chunks discarded as already seen."""
        with self._stale_lock:
            return self._stale

    def pending(self) -> list[str]:
        """Ids of messages still waiting for chunks."""
        return self._store.keys()

    def push(self, fragment: Fragment) -> Completed | None:
        log = logging.getLogger(
            ".".join((__name__, self.__class__.__name__, "push"))
        )

        if not fragment.is_final:
            accepted = self._store.update(
                fragment.message_id, partial(_accept, fragment)
            )
            if accepted:
                log.debug(
                    f"adding {len(fragment.content)} bytes to buffer for message {fragment.message_id}"
                )
            else:
                with self._stale_lock:
                    self._stale += 1
                STALE_CHUNKS.inc()
                log.debug(
                    f"chunk {fragment.chunk} from {fragment.message_id} was already processed, ignoring..."
                )
            return None

        if fragment.total == 1:
            return Completed(fragment.message_id, fragment.content)

        log.debug(
            f"adding {len(fragment.content)} bytes to final message {fragment.message_id}"
        )
        payload = self._store.update(fragment.message_id, partial(_complete, fragment))
        log.debug(f"cleanup buffer for message {fragment.message_id}")
        return Completed(fragment.message_id, payload)


def _accept(
    fragment: Fragment, entry: _Inflight | None
) -> tuple[_Inflight | None, bool]:
    if entry is None:
        entry = _Inflight()
    if entry.highest_chunk >= fragment.chunk:
        return entry, False
    entry.buffer += fragment.content
    entry.highest_chunk = fragment.chunk
    return entry, True


def _complete(
    fragment: Fragment, entry: _Inflight | None
) -> tuple[_Inflight | None, bytes]:
    # Returning None as the entry removes it from the store.
    buffered = entry.buffer if entry is not None else b""
    return None, bytes(buffered) + fragment.content


__all__ = [
    "ChunkDefragmenter",
    "EntryStore",
    "LockedEntryStore",
    "ShardedEntryStore",
]
