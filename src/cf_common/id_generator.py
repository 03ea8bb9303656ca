"""Snowflake-style ID generator for record IDs (members, deposits, cow purchases)
and receipt filenames.

IDs are decimal strings that increase monotonically within one process, so
records created by the same API process also sort in insertion order.

Layout (63 bits):
  - 41 bits: milliseconds since 2025-01-01T00:00:00Z
  - 10 bits: node id (0-1023)
  - 12 bits: per-millisecond sequence (0-4095)
"""

import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone

_EPOCH_MS = 1_735_689_600_000
_NODE_BITS = 10
_SEQ_BITS = 12
_SEQ_MASK = (1 << _SEQ_BITS) - 1


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class RecordIdGenerator:
    def __init__(self, node: int = 0, clock: Callable[[], int] = _wall_clock_ms) -> None:
        if not 0 <= node < (1 << _NODE_BITS):
            raise ValueError(f"node must be 0-{(1 << _NODE_BITS) - 1}, got {node}")
        self._node = node
        self._clock = clock
        self._last_ms = -1
        self._seq = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now = self._clock()
            if now < self._last_ms:
                # Clock stepped backwards: keep issuing from the last timestamp.
                now = self._last_ms
            if now == self._last_ms:
                self._seq = (self._seq + 1) & _SEQ_MASK
                if self._seq == 0:
                    while now <= self._last_ms:
                        now = self._clock()
            else:
                self._seq = 0
            self._last_ms = now
            value = ((now - _EPOCH_MS) << (_NODE_BITS + _SEQ_BITS)) | (self._node << _SEQ_BITS) | self._seq
            return str(value)


def id_timestamp(record_id: str) -> datetime:
    """Recover the UTC creation instant encoded in an ID."""
    ms = (int(record_id) >> (_NODE_BITS + _SEQ_BITS)) + _EPOCH_MS
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


_default_generator = RecordIdGenerator()


def generate_id() -> str:
    return _default_generator.next_id()
