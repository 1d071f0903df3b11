"""
Nonce generation

A NonceSource hands out process-unique, unpredictable nonces. It keeps a
64-bit counter that is seeded once, on first use, from the operating system's
secure random source mixed with the wall-clock time in nanoseconds. Every
call advances the counter and returns the new value as lowercase hex.
"""

import logging
import secrets
import threading
import time
from typing import Optional

logger = logging.getLogger(__name__)

COUNTER_MASK = (1 << 64) - 1


class NonceSource:
    """
    Thread-safe source of unique nonces
    
    Seeding and every increment happen under one lock, so concurrent callers
    never share a value.
    """
    
    def __init__(self):
        self._value: Optional[int] = None
        self._lock = threading.Lock()
    
    def _seed(self) -> int:
        seed = int.from_bytes(secrets.token_bytes(8), 'big') ^ time.time_ns()
        logger.debug("Seeded nonce counter")
        return seed & COUNTER_MASK
    
    def next(self) -> str:
        """
        Return a nonce never returned before by this source.
        
        Returns:
            str: Counter value as lowercase hex
        """
        with self._lock:
            if self._value is None:
                self._value = self._seed()
            self._value = (self._value + 1) & COUNTER_MASK
            value = self._value
        return format(value, 'x')
    
    __call__ = next


_default_source = NonceSource()


def get_default_nonce_source() -> NonceSource:
    """Process-wide nonce source shared by default-configured protocols"""
    return _default_source


def generate_nonce() -> str:
    """
    Generate a nonce from the process-wide source.
    
    Returns:
        str: Unique lowercase hex nonce
    """
    return _default_source.next()
