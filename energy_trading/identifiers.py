"""
Time and identity sources for the chaincode.

Timestamps are whole Unix seconds, the resolution stored on-chain.

PaymentDetail identifiers are derived from the nanosecond wall clock but
are strictly increasing within a process: two payments recorded on the same
clock tick still receive distinct ids. Both sources are plain callables and
can be swapped for fixed sequences in tests.
"""

import threading
import time


def unix_clock():
    return int(time.time())


class MonotonicIdSource:

    def __init__(self, now_ns=time.time_ns):
        self._now_ns = now_ns
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            candidate = self._now_ns()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate
