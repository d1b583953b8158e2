"""
Identifier generators.

Two variants:
- random: 16 random bytes, lowercase hex (32 chars)
- timestamp: "<unix seconds with fraction>.<4 hex chars>"

Generators never raise. Entropy failure degrades to an empty identifier
(random) or a zero suffix (timestamp) and is logged.
"""

import os
import time

from loguru import logger

RANDOM_ID_BYTES = 16
TIMESTAMP_SUFFIX_BYTES = 2


def _read_entropy(size: int) -> bytes:
    """Read random bytes from the OS. Returns b"" if the source is unavailable."""
    try:
        return os.urandom(size)
    except (OSError, NotImplementedError) as e:
        logger.warning(f"Entropy source failed ({size} bytes requested): {e}")
        return b""


class RandomIDGenerator:
    """Cryptographically random identifier."""

    def generate(self) -> str:
        raw = _read_entropy(RANDOM_ID_BYTES)
        if len(raw) != RANDOM_ID_BYTES:
            return ""
        return raw.hex()


class TimestampIDGenerator:
    """Timestamp with a short random suffix for ids minted in the same tick."""

    def generate(self) -> str:
        suffix = _read_entropy(TIMESTAMP_SUFFIX_BYTES)
        if len(suffix) != TIMESTAMP_SUFFIX_BYTES:
            suffix = bytes(TIMESTAMP_SUFFIX_BYTES)
        return "%f.%s" % (time.time_ns() / 1_000_000_000, suffix.hex())


def new_random_id_generator() -> RandomIDGenerator:
    return RandomIDGenerator()


def new_timestamp_id_generator() -> TimestampIDGenerator:
    return TimestampIDGenerator()
