"""
UUIDv7 generator following RFC 9562.

Identifiers for books and reading records are UUIDv7 strings: the first
48 bits hold the Unix timestamp in milliseconds, so ids created later sort
after earlier ones, and the remaining random bits keep them unique.

RFC 9562: https://www.rfc-editor.org/rfc/rfc9562.html
"""

import os
import time
from uuid import UUID


def uuid7() -> UUID:
    """
    Generate a UUIDv7 (time-ordered).

    Structure (128 bits total):
    - Bits 0-47 (48 bits): Unix timestamp in milliseconds
    - Bits 48-51 (4 bits): Version = 0111 (7)
    - Bits 52-63 (12 bits): Random (rand_a)
    - Bits 64-65 (2 bits): Variant = 10
    - Bits 66-127 (62 bits): Random (rand_b)

    Example:
        >>> from personal_library.domain.utils.uuid7 import uuid7
        >>> uuid7().version
        7
    """
    timestamp_ms = int(time.time() * 1000)
    random_bytes = os.urandom(10)

    ts_bytes = timestamp_ms.to_bytes(6, byteorder="big")

    # version nibble + 4 random bits, then 8 more bits of rand_a
    byte_6 = 0x70 | (random_bytes[0] & 0x0F)
    byte_7 = random_bytes[1]

    # variant (10) + 6 random bits
    byte_8 = 0x80 | (random_bytes[2] & 0x3F)

    uuid_bytes = ts_bytes + bytes([byte_6, byte_7, byte_8]) + random_bytes[3:10]
    return UUID(bytes=uuid_bytes)


def new_id() -> str:
    """Return a fresh identifier in the canonical string form."""
    return str(uuid7())


def parse_id(value: str) -> UUID:
    """
    Parse an identifier string.

    Raises:
        ValueError: If ``value`` is not a UUID string
    """
    if not isinstance(value, str):
        raise ValueError(f"identifier must be a string, got {type(value).__name__}")
    return UUID(value)
