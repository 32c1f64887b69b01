"""Secure random source used for private keys and nonces.

A random source is any callable taking a byte count and returning that many
bytes. Production code uses :func:`os.urandom`; tests can pass a
:class:`DeterministicRandom` to get reproducible keys and nonces.
"""
from __future__ import annotations

import hashlib
import logging
import os
import threading
from typing import Callable, Optional

from keyseal.core.exceptions import RandomnessUnavailableError

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def default_source() -> RandomSource:
    return os.urandom


def read_random(length: int, source: Optional[RandomSource] = None) -> bytes:
    """Read exactly ``length`` bytes from ``source`` (``os.urandom`` if None).

    Raises:
        RandomnessUnavailableError: if the source fails or returns short.
    """
    source = source or default_source()
    try:
        data = source(length)
    except (OSError, NotImplementedError) as e:
        logger.error("secure random source failed: %s", e)
        raise RandomnessUnavailableError(f"secure random source unavailable: {e}") from e

    if not isinstance(data, (bytes, bytearray)) or len(data) != length:
        got = len(data) if isinstance(data, (bytes, bytearray)) else type(data).__name__
        raise RandomnessUnavailableError(
            f"secure random source returned {got} instead of {length} bytes"
        )
    return bytes(data)


class DeterministicRandom:
    """Reproducible byte stream derived from a seed with SHAKE-256.

    Not a secure source; meant for fixtures where the same seed must give the
    same key pairs and nonces.
    """

    def __init__(self, seed: bytes | str):
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        self._seed = seed
        self._counter = 0
        self._lock = threading.Lock()

    def __call__(self, length: int) -> bytes:
        with self._lock:
            counter = self._counter
            self._counter += 1
        h = hashlib.shake_256()
        h.update(self._seed)
        h.update(counter.to_bytes(8, "big"))
        return h.digest(length)
