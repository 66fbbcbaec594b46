"""Identifier generation — time-ordered UUIDv7 strings for new categories.

Invariants:
    - Layout: 48-bit unix milliseconds | version 7 | 12 random bits |
      RFC 4122 variant | 62 random bits
    - Lexicographic order of the string form follows creation time (per ms)
"""

import os
import time
import uuid

from catalog.core.domain_types import CategoryId

_TIMESTAMP_MASK = (1 << 48) - 1
_RAND_B_MASK = (1 << 62) - 1


def new_category_id() -> CategoryId:
    """Generate a fresh UUIDv7 identifier."""
    unix_ms = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), "big")

    value = (unix_ms & _TIMESTAMP_MASK) << 80
    value |= 0x7 << 76
    value |= ((rand >> 68) & 0xFFF) << 64
    value |= 0b10 << 62
    value |= rand & _RAND_B_MASK
    return CategoryId(str(uuid.UUID(int=value)))
