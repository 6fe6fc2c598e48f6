"""
Nonce and timestamp generation for OAuth requests.

Nonces combine a random integer with a process-wide counter. Two nonces
produced in the same process never collide, even within one clock tick.
Uniqueness across processes is not guaranteed.
"""

import random
import threading
import time
from typing import Optional

# Random part is zero-padded to this many digits so the counter prefix
# can be recovered unambiguously.
_RANDOM_DIGITS = 10
_RANDOM_MAX = 2 ** 31 - 1


def generate_timestamp() -> str:
    """Return current UTC Unix time as a decimal string."""
    return str(int(time.time()))


class NonceCounter:
    """Monotonically increasing counter shared between nonce generators."""

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return the current value and advance by one."""
        with self._lock:
            value = self._value
            self._value += 1
        return value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


DEFAULT_NONCE_COUNTER = NonceCounter()


class NonceGenerator:
    """
    Generate nonces and timestamps for OAuth requests.

    The random source is seeded once, from the current time, when the
    generator is created.
    """

    def __init__(self, counter: Optional[NonceCounter] = None, seed: Optional[int] = None):
        """
        Initialize nonce generator.

        Args:
            counter: Shared counter, defaults to the process-wide one
            seed: Random seed, defaults to a time-derived value
        """
        self.counter = counter if counter is not None else DEFAULT_NONCE_COUNTER
        self._random = random.Random(seed if seed is not None else time.time_ns())
        self._lock = threading.Lock()

    def nonce(self) -> str:
        """Return a nonce unique within this process."""
        with self._lock:
            random_part = self._random.randint(0, _RANDOM_MAX)
        offset = self.counter.next()
        return '{}{:0{}d}'.format(offset, random_part, _RANDOM_DIGITS)

    def timestamp(self) -> str:
        return generate_timestamp()


DEFAULT_NONCE_GENERATOR = NonceGenerator()
