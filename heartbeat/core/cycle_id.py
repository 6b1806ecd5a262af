"""Cycle Ids — process-unique tokens "<time36>-<rand36>-<counter36>".

Invariants:
    - Counter strictly increases per generator; no two calls share a value
    - Time component never decreases, even if the wall clock steps backwards
    - Uniqueness holds within one process only (ids are not durable keys)

Design Decisions:
    - Counter and clamp guarded by one threading.Lock: safe for tasks and threads
    - Clock and rng injectable so tests can freeze time
"""

import itertools
import random
import string
import threading
import time
from collections.abc import Callable

from heartbeat.core.domain_types import CycleId

_BASE36 = string.digits + string.ascii_lowercase
_RANDOM_LENGTH = 6


def to_base36(value: int) -> str:
    """Encode a non-negative int in lowercase base 36."""
    if value < 0:
        raise ValueError(f"base36 encoding needs a non-negative int, got {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class CycleIdGenerator:
    """Issues unique cycle ids for the lifetime of the process."""

    def __init__(
        self,
        clock: Callable[[], int] = _now_ms,
        rng: random.Random | None = None,
    ):
        self._clock = clock
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._last_ms = 0

    def next_id(self) -> CycleId:
        with self._lock:
            self._last_ms = max(self._last_ms, self._clock())
            timestamp = self._last_ms
            seq = next(self._counter)
            suffix = "".join(self._rng.choices(_BASE36, k=_RANDOM_LENGTH))
        return CycleId(f"{to_base36(timestamp)}-{suffix}-{to_base36(seq)}")


_default_generator = CycleIdGenerator()


def generate_cycle_id() -> CycleId:
    return _default_generator.next_id()
