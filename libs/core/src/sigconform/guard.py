from __future__ import annotations

"""Canary stamping for the bytes that bracket every buffer handed to a scheme.

The pattern is written once when a buffer is allocated and compared after each
call into the implementation. Any difference means the implementation wrote
outside the span it was given.
"""

CANARY = bytes((0x01, 0x23, 0x45, 0x67, 0x89, 0xAB, 0xCD, 0xEF))
GUARD_BYTES = len(CANARY)


def write_guard(buffer, offset: int) -> None:
    buffer[offset:offset + GUARD_BYTES] = CANARY


def check_guard(buffer, offset: int) -> bool:
    return bytes(buffer[offset:offset + GUARD_BYTES]) == CANARY
